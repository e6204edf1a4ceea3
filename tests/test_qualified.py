import os

from wrap_gen import Qualified


def test_renderings():
    q = Qualified(['gtsam', 'noiseModel'], 'Base')
    assert q.qualified_name('.') == 'gtsam.noiseModel.Base'
    assert q.qualified_name('') == 'gtsamnoiseModelBase'
    assert q.qualified_name('::') == 'gtsam::noiseModel::Base'
    assert q.qualified_name() == 'gtsamnoiseModelBase'
    assert str(q) == 'gtsam::noiseModel::Base'


def test_no_namespace():
    q = Qualified((), 'foo')
    assert q.qualified_name('.') == 'foo'
    assert q.qualified_name('::') == 'foo'
    assert not q.empty
    assert Qualified((), '').empty


def test_namespaces_stored_as_tuple_and_hashable():
    a = Qualified(['m'], 'foo')
    b = Qualified(('m',), 'foo')
    assert a.namespaces == ('m',)
    assert a == b
    assert len({a, b}) == 1
    assert Qualified(['ab', 'c'], 'f') != Qualified(['a', 'bc'], 'f')


def test_matlab_name():
    q = Qualified(['ns1', 'ns2'], 'func')
    assert q.matlab_name('toolbox') == os.path.join('toolbox', '+ns1', '+ns2', 'func.m')
    assert Qualified((), 'func').matlab_name('toolbox') == os.path.join('toolbox', 'func.m')
