"""
Main generator module

Runs one generation pass: every global function is written to its
dispatch script(s) and to the shared MEX source, which ends with the
gateway that routes registry ids to wrapper functions.
"""

import os
from typing import Optional

from .codegen import FileWriter
from .function import GlobalFunction, WrapperRegistry, WRAPPER_SIGNATURE
from .ir import IR, FuncInfo
from .types import TypeAttributesTable


class Generator:
    """MATLAB toolbox generator for global functions"""

    def __init__(self, toolbox_path: str, wrapper_name: str, verbose: bool = False):
        self.toolbox_path = toolbox_path
        self.wrapper_name = wrapper_name
        self.verbose = verbose
        self.type_attributes = TypeAttributesTable()
        self._functions: dict[str, GlobalFunction] = {}
        self._ignores: set[str] = set()

    def ignore(self, *names: str):
        """Skip global functions by C++ qualified name (e.g. 'gtsam::load2D')"""
        self._ignores.update(names)

    def add_function(self, func: FuncInfo):
        """Add one overload, overloads are grouped by leaf name"""
        if func.name.qualified_name('::') in self._ignores:
            return
        function = self._functions.setdefault(func.name.name, GlobalFunction())
        function.add_overload(self.verbose, func.name, func.args, func.return_value)

    def add_ir(self, ir: IR):
        """Add all functions and class attributes of an IR"""
        for cls in ir.classes:
            self.type_attributes.add_class(cls.name, cls.is_virtual)
        for func in ir.funcs:
            self.add_function(func)

    @property
    def functions(self) -> list[GlobalFunction]:
        return [self._functions[name] for name in sorted(self._functions)]

    def prepare(self):
        """Prepare output directory"""
        print('=== Generating MATLAB wrapper:')
        os.makedirs(self.toolbox_path, exist_ok=True)

    def generate(self, registry: Optional[WrapperRegistry] = None) -> WrapperRegistry:
        """Generate all dispatch scripts and the MEX source, returns the registry"""
        self.prepare()
        registry = registry if registry is not None else WrapperRegistry()

        wrapper_file = FileWriter(
            os.path.join(self.toolbox_path, f'{self.wrapper_name}.cpp'), self.verbose, '//')
        self._gen_prologue(wrapper_file)

        for function in self.functions:
            print(f'  {function.name} ({len(function)} overloads)')
            function.generate(self.toolbox_path, self.wrapper_name, self.type_attributes,
                              wrapper_file, registry)
            wrapper_file.line()

        self._gen_mex_function(registry, wrapper_file)
        wrapper_file.emit(True)
        return registry

    def _gen_prologue(self, gen: FileWriter):
        gen.line('#include <wrap/matlab.h>')
        gen.line('#include <map>')
        gen.line()

    def _gen_mex_function(self, registry: WrapperRegistry, gen: FileWriter):
        """Generate the MEX gateway, in[0] holds the registry id"""
        gen.line(f'void mexFunction{WRAPPER_SIGNATURE}')
        with gen.block('{'):
            gen.line('int id = unwrap<int>(in[0]);')
            gen.line()
            with gen.block('try {'):
                with gen.block('switch(id) {'):
                    for id, name in enumerate(registry):
                        gen.line(f'case {id}:')
                        gen.indent()
                        gen.line(f'{name}(nargout, out, nargin-1, in+1);')
                        gen.line('break;')
                        gen.dedent()
            gen.line('catch(const std::exception& e) {')
            gen.indent()
            gen.line(f'mexErrMsgTxt(("Exception from {self.wrapper_name}:\\n" + '
                     f'std::string(e.what()) + "\\n").c_str());')
            gen.dedent()
            gen.line('}')
