import pytest

from wrap_gen import Argument, ArgumentList, CodeGen, Qualified, ReturnType, ReturnValue


def arg(type_name: str, name: str = 'x', namespaces=(), **kwargs) -> Argument:
    return Argument(Qualified(namespaces, type_name), name, **kwargs)


def args(*type_names: str) -> ArgumentList:
    return ArgumentList(arg(t, f'a{i}') for i, t in enumerate(type_names))


def returns(type_name: str, namespaces=(), is_ptr: bool = False) -> ReturnValue:
    return ReturnValue(ReturnType(Qualified(namespaces, type_name), is_ptr))


@pytest.fixture
def wrapper_file() -> CodeGen:
    return CodeGen()
