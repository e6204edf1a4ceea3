"""
Qualified name module

A leaf name together with the stack of namespaces it is declared in.
"""

from dataclasses import dataclass
import os


@dataclass(frozen=True)
class Qualified:
    """Name with (nested) namespaces, e.g. gtsam::noiseModel::Diagonal"""
    namespaces: tuple[str, ...]
    name: str

    def __post_init__(self):
        # Accept any iterable of segments but always store a tuple
        object.__setattr__(self, 'namespaces', tuple(self.namespaces))

    @property
    def empty(self) -> bool:
        return not self.namespaces and not self.name

    def qualified_name(self, delimiter: str = '') -> str:
        """Return namespaces and name joined by delimiter

        Examples (namespaces=('gtsam', 'noiseModel'), name='Base'):
            '.'  -> gtsam.noiseModel.Base
            ''   -> gtsamnoiseModelBase
            '::' -> gtsam::noiseModel::Base
        """
        return ''.join(ns + delimiter for ns in self.namespaces) + self.name

    def matlab_name(self, toolbox_path: str) -> str:
        """Return the MATLAB file name, i.e. toolbox_path/+ns1/+ns2/name.m"""
        parts = [toolbox_path] + ['+' + ns for ns in self.namespaces]
        return os.path.join(*parts, self.name + '.m')

    def __str__(self) -> str:
        return self.qualified_name('::')
