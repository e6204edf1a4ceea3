"""
Global function wrapping module

Collects the overloads of a free function and generates, for every
namespace it is declared in, one MATLAB dispatch script plus one C++ MEX
wrapper function per overload.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .codegen import FileWriter, create_namespace_structure
from .errors import DuplicateWrapperName, OverloadNameMismatch
from .qualified import Qualified
from .types import ArgumentList, ReturnValue

if TYPE_CHECKING:
    from .codegen import CodeGen
    from .types import TypeAttributesTable

WRAPPER_SIGNATURE = '(int nargout, mxArray *out[], int nargin, const mxArray *in[])'


@dataclass(frozen=True)
class Overload:
    """One concrete signature of a global function"""
    name: Qualified
    args: ArgumentList
    return_value: ReturnValue


class WrapperRegistry:
    """Ordered list of generated wrapper function names for one pass

    The id of a wrapper is its position in the list. MATLAB dispatch
    scripts call the MEX gateway with that id and the gateway switch maps
    it back to the wrapper function.
    """

    def __init__(self):
        self._names: list[str] = []
        self._ids: dict[str, int] = {}

    @property
    def next_id(self) -> int:
        return len(self._names)

    def register(self, name: str) -> int:
        if name in self._ids:
            raise DuplicateWrapperName(name, self._ids[name])
        id = len(self._names)
        self._names.append(name)
        self._ids[name] = id
        return id

    @property
    def names(self) -> list[str]:
        return list(self._names)

    def __getitem__(self, id: int) -> str:
        return self._names[id]

    def __iter__(self):
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)


@dataclass
class GlobalFunction:
    """A free function and all its overloads

    The verbose flag is overwritten by every add_overload() call, so the
    last call decides whether generation of the whole function is traced.
    """
    name: str = ''
    verbose: bool = False
    overloads: list[Overload] = field(default_factory=list)

    def add_overload(self, verbose: bool, overload: Qualified, args: ArgumentList,
                     return_value: ReturnValue):
        """Add an overload, all overloads must share the same leaf name"""
        if not self.name:
            self.name = overload.name
        elif overload.name != self.name:
            raise OverloadNameMismatch(self.name, overload.name)
        self.verbose = verbose
        self.overloads.append(Overload(overload, ArgumentList(args), return_value))

    @property
    def arg_lists(self) -> list[ArgumentList]:
        return [o.args for o in self.overloads]

    @property
    def return_vals(self) -> list[ReturnValue]:
        return [o.return_value for o in self.overloads]

    @property
    def overload_names(self) -> list[Qualified]:
        return [o.name for o in self.overloads]

    def __len__(self) -> int:
        return len(self.overloads)

    def group_by_namespace(self) -> dict[tuple[str, ...], 'GlobalFunction']:
        """Split overloads into one GlobalFunction per namespace, sorted by namespace"""
        grouped: dict[tuple[str, ...], GlobalFunction] = {}
        for overload in self.overloads:
            key = overload.name.namespaces
            if key not in grouped:
                grouped[key] = GlobalFunction(self.name, self.verbose)
            grouped[key].overloads.append(overload)
        return {key: grouped[key] for key in sorted(grouped)}

    def generate(self, toolbox_path: str, wrapper_name: str,
                 type_attributes: 'TypeAttributesTable', file: 'CodeGen',
                 registry: WrapperRegistry):
        """Generate dispatch scripts and C++ wrappers for every namespace"""
        grouped = self.group_by_namespace()
        for i, function in enumerate(grouped.values()):
            if i > 0:
                file.line()
            function.generate_single_function(
                toolbox_path, wrapper_name, type_attributes, file, registry)

    def generate_single_function(self, toolbox_path: str, wrapper_name: str,
                                 type_attributes: 'TypeAttributesTable', file: 'CodeGen',
                                 registry: WrapperRegistry):
        """Generate for overloads that all live in the same namespace"""
        overload1 = self.overloads[0].name
        create_namespace_structure(overload1.namespaces, toolbox_path)

        mfile = FileWriter(overload1.matlab_name(toolbox_path), self.verbose, '%')

        matlab_qual_name = overload1.qualified_name('.')
        matlab_unique_name = overload1.qualified_name('')
        cpp_name = overload1.qualified_name('::')

        mfile.line(f'function varargout = {self.name}(varargin)')
        mfile.indent()

        for i, overload in enumerate(self.overloads):
            args = overload.args
            return_value = overload.return_value
            wrap_function_name = f'{matlab_unique_name}_{i}'
            id = registry.next_id

            # MATLAB dispatch branch, calls the gateway with the registry id
            args.emit_conditional_call(mfile, 'if' if i == 0 else 'elseif',
                                       return_value, wrapper_name, id, True)

            # C++ wrapper
            file.line(f'void {wrap_function_name}{WRAPPER_SIGNATURE}')
            with file.block('{'):
                return_value.wrap_type_unwrap(file)
                file.line(f'checkArguments("{matlab_qual_name}",nargout,nargin,{len(args)});')
                # No object is passed to a global function, inputs start at in[0]
                args.matlab_unwrap(file, 0)
                call = f'{cpp_name}({args.names()})'
                if not return_value.is_void:
                    return_value.wrap_result(call, file, type_attributes)
                else:
                    file.line(f'{call};')

            registry.register(wrap_function_name)

        mfile.line('else')
        mfile.indent()
        mfile.line(f"error('Arguments do not match any overload of function {matlab_qual_name}');")
        mfile.dedent()
        mfile.line('end')
        mfile.dedent()

        mfile.emit(True)
