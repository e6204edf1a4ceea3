"""
GlobalFunction tests: overload aggregation, namespace grouping and the
generated dispatch scripts / MEX wrapper functions.
"""

import os

import pytest

from wrap_gen import (
    CodeGen, DuplicateWrapperName, GlobalFunction, OverloadNameMismatch,
    Qualified, TypeAttributesTable, WrapperRegistry,
)
from conftest import args, returns


def _function(*overloads, verbose=False) -> GlobalFunction:
    function = GlobalFunction()
    for namespaces, name, arg_types in overloads:
        function.add_overload(verbose, Qualified(namespaces, name), args(*arg_types),
                              returns('void'))
    return function


def _generate(tmp_path, function: GlobalFunction, registry=None):
    wrapper_file = CodeGen()
    registry = registry if registry is not None else WrapperRegistry()
    function.generate(str(tmp_path), 'wrapper', TypeAttributesTable(), wrapper_file, registry)
    return wrapper_file.output(), registry


def _read(path) -> str:
    with open(path) as f:
        return f.read()


def _mfiles(root) -> list[str]:
    found = []
    for dirpath, _dirnames, filenames in os.walk(root):
        for filename in filenames:
            if filename.endswith('.m'):
                found.append(os.path.relpath(os.path.join(dirpath, filename), root))
    return sorted(found)


class TestAddOverload:

    def test_first_overload_sets_name(self):
        function = GlobalFunction()
        function.add_overload(False, Qualified(['m'], 'foo'), args('int'), returns('void'))
        assert function.name == 'foo'
        assert len(function) == 1

    def test_overloads_keep_call_order(self):
        function = _function((['m'], 'foo', ['int']), (['n'], 'foo', []), (['m'], 'foo', ['double']))
        assert [len(a) for a in function.arg_lists] == [1, 0, 1]
        assert [q.namespaces for q in function.overload_names] == [('m',), ('n',), ('m',)]
        assert len(function.return_vals) == 3

    def test_name_mismatch_leaves_group_unchanged(self):
        function = _function((['m'], 'foo', ['int']))
        with pytest.raises(OverloadNameMismatch) as excinfo:
            function.add_overload(True, Qualified(['m'], 'baz'), args(), returns('void'))
        assert excinfo.value.expected == 'foo'
        assert excinfo.value.actual == 'baz'
        assert len(function) == 1
        assert function.overload_names == [Qualified(['m'], 'foo')]
        assert function.verbose is False

    def test_verbose_last_write_wins(self):
        function = GlobalFunction()
        function.add_overload(True, Qualified([], 'foo'), args(), returns('void'))
        function.add_overload(False, Qualified([], 'foo'), args('int'), returns('void'))
        assert function.verbose is False
        function.add_overload(True, Qualified([], 'foo'), args('double'), returns('void'))
        assert function.verbose is True


class TestGroupByNamespace:

    def test_sorted_buckets(self):
        function = _function((['b'], 'bar', []), (['a'], 'bar', ['int']), (['b'], 'bar', ['int']))
        grouped = function.group_by_namespace()
        assert list(grouped) == [('a',), ('b',)]
        assert len(grouped[('a',)]) == 1
        assert len(grouped[('b',)]) == 2
        assert all(g.name == 'bar' for g in grouped.values())

    def test_buckets_copy_verbosity(self):
        function = _function((['a'], 'bar', []), verbose=True)
        assert function.group_by_namespace()[('a',)].verbose is True

    def test_concatenation_does_not_alias(self):
        function = _function((['ab', 'c'], 'f', []), (['a', 'bc'], 'f', []))
        grouped = function.group_by_namespace()
        assert list(grouped) == [('a', 'bc'), ('ab', 'c')]
        assert sum(len(g) for g in grouped.values()) == 2


class TestGenerate:

    def test_same_namespace_overloads(self, tmp_path):
        function = _function((['m'], 'foo', ['int']), (['m'], 'foo', ['double']))
        output, registry = _generate(tmp_path, function)

        assert _mfiles(tmp_path) == [os.path.join('+m', 'foo.m')]
        assert _read(tmp_path / '+m' / 'foo.m') == (
            '% automatically generated by wrap\n'
            'function varargout = foo(varargin)\n'
            "  if length(varargin) == 1 && isa(varargin{1},'numeric')\n"
            '    wrapper(0, varargin{:});\n'
            "  elseif length(varargin) == 1 && isa(varargin{1},'double')\n"
            '    wrapper(1, varargin{:});\n'
            '  else\n'
            "    error('Arguments do not match any overload of function m.foo');\n"
            '  end\n'
        )
        assert registry.names == ['mfoo_0', 'mfoo_1']
        assert output == (
            'void mfoo_0(int nargout, mxArray *out[], int nargin, const mxArray *in[])\n'
            '{\n'
            '  checkArguments("m.foo",nargout,nargin,1);\n'
            '  int a0 = unwrap< int >(in[0]);\n'
            '  m::foo(a0);\n'
            '}\n'
            'void mfoo_1(int nargout, mxArray *out[], int nargin, const mxArray *in[])\n'
            '{\n'
            '  checkArguments("m.foo",nargout,nargin,1);\n'
            '  double a0 = unwrap< double >(in[0]);\n'
            '  m::foo(a0);\n'
            '}'
        )

    def test_split_by_namespace(self, tmp_path):
        function = _function((['b'], 'bar', []), (['a'], 'bar', []))
        output, registry = _generate(tmp_path, function)

        assert _mfiles(tmp_path) == [os.path.join('+a', 'bar.m'), os.path.join('+b', 'bar.m')]
        for ns in 'ab':
            script = _read(tmp_path / f'+{ns}' / 'bar.m')
            assert script.count('if length(varargin)') == 1
            assert 'elseif' not in script
            assert script.count('  else\n') == 1
            assert f'function {ns}.bar' in script
        assert registry.names == ['abar_0', 'bbar_0']
        # Blank line between namespaces only
        assert '}\n\nvoid bbar_0' in output
        assert not output.endswith('\n')

    def test_branch_targets_resolve_to_wrappers(self, tmp_path):
        registry = WrapperRegistry()
        registry.register('other_0')
        function = _function((['a'], 'bar', []), (['b'], 'bar', ['int']), (['b'], 'bar', []))
        _generate(tmp_path, function, registry)

        # Wrapper names use the local index, calls use the registry id
        assert registry.names == ['other_0', 'abar_0', 'bbar_0', 'bbar_1']
        assert 'wrapper(1, varargin{:});' in _read(tmp_path / '+a' / 'bar.m')
        script = _read(tmp_path / '+b' / 'bar.m')
        assert "if length(varargin) == 1 && isa(varargin{1},'numeric')\n    wrapper(2," in script
        assert 'elseif length(varargin) == 0\n    wrapper(3,' in script

    def test_counts_and_unique_names(self, tmp_path):
        function = _function(
            ([], 'f', []), ([], 'f', ['int']), (['x'], 'f', []),
            (['x', 'y'], 'f', ['double']), (['x', 'y'], 'f', []))
        output, registry = _generate(tmp_path, function)
        assert len(_mfiles(tmp_path)) == 3
        assert len(registry) == 5
        assert len(set(registry.names)) == 5
        assert output.count('void ') == 5
        assert (tmp_path / '+x' / '+y' / 'f.m').is_file()
        assert (tmp_path / 'f.m').is_file()

    def test_non_void_result(self, tmp_path):
        function = GlobalFunction()
        function.add_overload(False, Qualified(['m'], 'norm'), args('Vector'), returns('double'))
        output, _registry = _generate(tmp_path, function)
        assert 'out[0] = wrap< double >(m::norm(a0));' in output
        assert 'varargout{1} = wrapper(0, varargin{:});' in _read(tmp_path / '+m' / 'norm.m')

    def test_duplicate_wrapper_name(self, tmp_path):
        registry = WrapperRegistry()
        registry.register('mfoo_0')
        function = _function((['m'], 'foo', []))
        with pytest.raises(DuplicateWrapperName):
            _generate(tmp_path, function, registry)

    def test_verbose_traces_to_stderr(self, tmp_path, capsys):
        function = _function((['m'], 'foo', []), verbose=True)
        _generate(tmp_path, function)
        err = capsys.readouterr().err
        assert 'generating' in err
        assert 'foo.m' in err


class TestWrapperRegistry:

    def test_ids_follow_registration_order(self):
        registry = WrapperRegistry()
        assert registry.next_id == 0
        assert registry.register('a_0') == 0
        assert registry.register('b_0') == 1
        assert registry.next_id == 2
        assert registry[1] == 'b_0'
        assert list(registry) == ['a_0', 'b_0']

    def test_duplicate_is_rejected(self):
        registry = WrapperRegistry()
        registry.register('a_0')
        with pytest.raises(DuplicateWrapperName, match='a_0'):
            registry.register('a_0')
        assert len(registry) == 1
