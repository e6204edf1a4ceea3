"""
Type descriptor module

Arguments, return values and class attributes, together with the MATLAB
and C++ code they emit for a wrapped call: the argument check in the
MATLAB dispatch script, unwrapping of mxArray inputs and wrapping of the
C++ result.
"""

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING

from .errors import TypeAttributesMissing
from .qualified import Qualified

if TYPE_CHECKING:
    from .codegen import CodeGen

# Types passed by value through wrap<T>/unwrap<T>
BASIS_TYPES = {
    'string', 'bool', 'char', 'unsigned char', 'int', 'size_t',
    'double', 'float', 'Key',
}

# Eigen types, also passed by value
EIGEN_TYPES = {'Vector', 'Matrix'}

# Return type categories
VOID = 'void'
BASIS = 'basis'
EIGEN = 'eigen'
CLASS = 'class'


@dataclass(frozen=True)
class Argument:
    """Function argument"""
    type: Qualified
    name: str
    is_const: bool = False
    is_ref: bool = False
    is_ptr: bool = False

    def matlab_class(self, delim: str = '') -> str:
        """MATLAB class used in the isa() check of the dispatch script"""
        result = ''.join(ns + delim for ns in self.type.namespaces)
        name = self.type.name
        if name in ('string', 'unsigned char', 'char'):
            return result + 'char'
        if name in EIGEN_TYPES:
            return result + 'double'
        if name in ('int', 'size_t'):
            return result + 'numeric'
        if name == 'bool':
            return result + 'logical'
        return result + name

    def matlab_unwrap(self, matlab_name: str) -> str:
        """C++ statement declaring this argument from an mxArray"""
        cpp_type = self.type.qualified_name('::')
        unique_type = self.type.qualified_name()
        if self.is_ptr:
            # Shared pointer held by the MATLAB object
            return (f'boost::shared_ptr<{cpp_type}> {self.name} = '
                    f'unwrap_shared_ptr< {cpp_type} >({matlab_name}, "ptr_{unique_type}");')
        elif self.is_ref:
            return (f'{cpp_type}& {self.name} = '
                    f'*unwrap_shared_ptr< {cpp_type} >({matlab_name}, "ptr_{unique_type}");')
        else:
            return f'{cpp_type} {self.name} = unwrap< {cpp_type} >({matlab_name});'


class ArgumentList(tuple):
    """Immutable argument list of one overload"""

    def __new__(cls, args=()):
        return super().__new__(cls, args)

    def names(self) -> str:
        """Comma separated argument names, as used in the C++ call"""
        return ', '.join(arg.name for arg in self)

    def emit_conditional_call(self, file: 'CodeGen', keyword: str, return_value: 'ReturnValue',
                              wrapper_name: str, id: int, static_method: bool = True):
        """Emit one dispatch branch: argument count and type checks, then the call

        keyword is 'if' for the first branch and 'elseif' for the others.
        """
        checks = [f'length(varargin) == {len(self)}']
        for i, arg in enumerate(self):
            checks.append(f"isa(varargin{{{i + 1}}},'{arg.matlab_class('.')}')")
        file.line(f'{keyword} ' + ' && '.join(checks))
        file.indent()
        self.emit_call(file, return_value, wrapper_name, id, static_method)
        file.dedent()

    def emit_call(self, file: 'CodeGen', return_value: 'ReturnValue', wrapper_name: str,
                  id: int, static_method: bool = True):
        """Emit the call into the MEX gateway; only methods pass 'this'"""
        this = '' if static_method else ', this'
        file.line(f'{return_value.emit_matlab()}{wrapper_name}({id}{this}, varargin{{:}});')

    def matlab_unwrap(self, file: 'CodeGen', start: int = 0):
        """Emit unwrap statements for in[start], in[start + 1], ..."""
        for index, arg in enumerate(self, start):
            file.line(arg.matlab_unwrap(f'in[{index}]'))


@dataclass(frozen=True)
class ReturnType:
    """One returned type"""
    type: Qualified
    is_ptr: bool = False

    @property
    def name(self) -> str:
        return self.type.name

    @property
    def category(self) -> str:
        if self.type.name == 'void' and not self.type.namespaces:
            return VOID
        if self.type.name in BASIS_TYPES:
            return BASIS
        if self.type.name in EIGEN_TYPES:
            return EIGEN
        return CLASS

    @property
    def is_void(self) -> bool:
        return self.category == VOID

    def return_type(self, add_ptr: bool) -> str:
        cpp_type = self.type.qualified_name('::')
        if self.is_ptr and add_ptr:
            return f'boost::shared_ptr<{cpp_type}>'
        return cpp_type

    def wrap_type_unwrap(self, file: 'CodeGen'):
        """Emit the Shared<Name> typedef used when wrapping pointers"""
        if self.category == CLASS or self.is_ptr:
            file.line(f'typedef boost::shared_ptr<{self.type.qualified_name("::")}> Shared{self.name};')

    def wrap_result(self, out: str, result: str, file: 'CodeGen',
                    type_attributes: 'TypeAttributesTable'):
        """Emit the assignment of the wrapped result to an output slot"""
        cpp_type = self.type.qualified_name('::')
        matlab_type = self.type.qualified_name('.')

        if self.category == CLASS:
            is_virtual = type_attributes.attributes(cpp_type).is_virtual
            if self.is_ptr:
                obj_copy = result
            elif is_virtual:
                obj_copy = f'{result}.clone()'
            else:
                obj_copy = f'Shared{self.name}(new {cpp_type}({result}))'
            virtual = 'true' if is_virtual else 'false'
            file.line(f'{out} = wrap_shared_ptr({obj_copy},"{matlab_type}", {virtual});')
        elif self.is_ptr:
            file.line(f'Shared{self.name}* ret = new Shared{self.name}({result});')
            file.line(f'{out} = wrap_shared_ptr(ret,"{matlab_type}");')
        elif not self.is_void:
            file.line(f'{out} = wrap< {self.return_type(False)} >({result});')


@dataclass(frozen=True)
class ReturnValue:
    """Return value of an overload: a single type or a std::pair"""
    type1: ReturnType
    type2: Optional[ReturnType] = None

    @property
    def is_pair(self) -> bool:
        return self.type2 is not None

    @property
    def is_void(self) -> bool:
        return not self.is_pair and self.type1.is_void

    def return_type(self, add_ptr: bool) -> str:
        if self.is_pair:
            return (f'std::pair< {self.type1.return_type(add_ptr)}, '
                    f'{self.type2.return_type(add_ptr)} >')
        return self.type1.return_type(add_ptr)

    def emit_matlab(self) -> str:
        """Output capture in front of a call in the dispatch script"""
        if self.is_pair:
            return '[ varargout{1} varargout{2} ] = '
        if not self.is_void:
            return 'varargout{1} = '
        return ''

    def wrap_type_unwrap(self, file: 'CodeGen'):
        self.type1.wrap_type_unwrap(file)
        if self.is_pair:
            self.type2.wrap_type_unwrap(file)

    def wrap_result(self, result: str, file: 'CodeGen', type_attributes: 'TypeAttributesTable'):
        """Emit code storing the result of call expression `result` in out[]"""
        if self.is_pair:
            # Store the pair so the call is evaluated only once
            file.line(f'{self.return_type(True)} pairResult = {result};')
            self.type1.wrap_result('out[0]', 'pairResult.first', file, type_attributes)
            self.type2.wrap_result('out[1]', 'pairResult.second', file, type_attributes)
        else:
            self.type1.wrap_result('out[0]', result, file, type_attributes)


ReturnValue.VOID = ReturnValue(ReturnType(Qualified((), 'void')))


@dataclass(frozen=True)
class TypeAttributes:
    """Attributes of a wrapped class"""
    is_virtual: bool = False


@dataclass
class TypeAttributesTable:
    """Lookup of class attributes by C++ qualified name"""
    _table: dict[str, TypeAttributes] = field(default_factory=dict)

    def add_class(self, cls: Qualified, is_virtual: bool = False):
        self._table[cls.qualified_name('::')] = TypeAttributes(is_virtual)

    def attributes(self, key: str) -> TypeAttributes:
        if key not in self._table:
            raise TypeAttributesMissing(key)
        return self._table[key]

    def __contains__(self, key: str) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)
