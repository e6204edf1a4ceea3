"""
IR (Intermediate Representation) module

Reads already parsed declarations from JSON: global functions with their
argument and return types, and the classes whose attributes are needed
when wrapping results.
"""

from dataclasses import dataclass
from typing import Optional
import json

from .qualified import Qualified
from .types import (
    Argument, ArgumentList, ReturnType, ReturnValue, TypeAttributesTable,
)


@dataclass(frozen=True)
class FuncInfo:
    """Global function declaration"""
    name: Qualified
    args: ArgumentList
    return_value: ReturnValue


@dataclass(frozen=True)
class ClassInfo:
    """Wrapped class declaration"""
    name: Qualified
    is_virtual: bool = False


@dataclass
class IR:
    """Declarations to wrap"""
    funcs: list[FuncInfo]
    classes: list[ClassInfo]

    @classmethod
    def load(cls, json_path: str) -> 'IR':
        """Load IR from a JSON file"""
        with open(json_path, 'r') as f:
            data = json.load(f)
        return cls._from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'IR':
        """Create IR from a dictionary"""
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> 'IR':
        """Internal: Parse dict into IR"""
        funcs = [cls._parse_func(decl) for decl in data.get('functions', [])]
        classes = [cls._parse_class(decl) for decl in data.get('classes', [])]
        return cls(funcs=funcs, classes=classes)

    @staticmethod
    def _parse_func(decl: dict) -> FuncInfo:
        """Parse function declaration"""
        args = ArgumentList(IR._parse_arg(a) for a in decl.get('args', []))
        return FuncInfo(
            name=Qualified(decl.get('namespaces', []), decl['name']),
            args=args,
            return_value=IR._parse_return(decl.get('returns'), decl.get('returns2')),
        )

    @staticmethod
    def _parse_arg(decl: dict) -> Argument:
        """Parse function argument"""
        return Argument(
            type=Qualified(decl.get('namespaces', []), decl['type']),
            name=decl['name'],
            is_const=decl.get('is_const', False),
            is_ref=decl.get('is_ref', False),
            is_ptr=decl.get('is_ptr', False),
        )

    @staticmethod
    def _parse_return_type(decl: dict) -> ReturnType:
        return ReturnType(
            type=Qualified(decl.get('namespaces', []), decl['type']),
            is_ptr=decl.get('is_ptr', False),
        )

    @staticmethod
    def _parse_return(decl: Optional[dict], decl2: Optional[dict]) -> ReturnValue:
        """Parse return value, a missing return means void"""
        if decl is None:
            return ReturnValue.VOID
        type2 = IR._parse_return_type(decl2) if decl2 is not None else None
        return ReturnValue(IR._parse_return_type(decl), type2)

    @staticmethod
    def _parse_class(decl: dict) -> ClassInfo:
        """Parse class declaration"""
        return ClassInfo(
            name=Qualified(decl.get('namespaces', []), decl['name']),
            is_virtual=decl.get('virtual', False),
        )

    def type_attributes(self) -> TypeAttributesTable:
        """Build the type attributes table from the class declarations"""
        table = TypeAttributesTable()
        for cls in self.classes:
            table.add_class(cls.name, cls.is_virtual)
        return table
