"""
wrap_gen - MATLAB wrapper generation for C++ global functions

Given overloaded free-function declarations, generates one MATLAB dispatch
script per namespace and one C++ MEX wrapper function per overload, plus
the MEX gateway that connects both.
"""

from .qualified import Qualified
from .types import (
    Argument, ArgumentList, ReturnType, ReturnValue,
    TypeAttributes, TypeAttributesTable,
)
from .codegen import CodeGen, FileWriter, create_namespace_structure
from .function import GlobalFunction, Overload, WrapperRegistry
from .ir import IR, FuncInfo, ClassInfo
from .generator import Generator
from .errors import (
    WrapError, OverloadNameMismatch, DuplicateWrapperName,
    TypeAttributesMissing, OutputError,
)

__all__ = [
    'Qualified',
    'Argument', 'ArgumentList', 'ReturnType', 'ReturnValue',
    'TypeAttributes', 'TypeAttributesTable',
    'CodeGen', 'FileWriter', 'create_namespace_structure',
    'GlobalFunction', 'Overload', 'WrapperRegistry',
    'IR', 'FuncInfo', 'ClassInfo',
    'Generator',
    'WrapError', 'OverloadNameMismatch', 'DuplicateWrapperName',
    'TypeAttributesMissing', 'OutputError',
]
