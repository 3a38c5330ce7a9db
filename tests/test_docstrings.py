"""Docstring completeness checks for parameters and return values."""

from __future__ import annotations

import importlib
import inspect
import pkgutil
from types import ModuleType
from typing import Iterator, List

import pytest
from numpydoc.docscrape import NumpyDocString

import matchcast

_NONE_ANNOTATIONS = {"none", "nonetype", "typing.none", "builtins.none", "builtins.nonetype"}


def _iter_modules(package: ModuleType) -> Iterator[ModuleType]:
    yield package
    for info in pkgutil.walk_packages(package.__path__, prefix=f"{package.__name__}."):
        yield importlib.import_module(info.name)


def _iter_members(cls: type) -> Iterator[object]:
    for name, member in vars(cls).items():
        if name.startswith("__"):
            continue
        if isinstance(member, (staticmethod, classmethod)):
            member = member.__func__
        if inspect.isfunction(member):
            yield member


def _collect_documentable() -> List[object]:
    found: List[object] = []
    seen: set[int] = set()
    for module in _iter_modules(matchcast):
        for name, obj in vars(module).items():
            if name.startswith("__") or getattr(obj, "__module__", None) != module.__name__:
                continue
            if inspect.isfunction(obj):
                candidates = [obj]
            elif inspect.isclass(obj):
                candidates = [obj, *_iter_members(obj)]
            else:
                continue
            for candidate in candidates:
                if id(candidate) not in seen:
                    seen.add(id(candidate))
                    found.append(candidate)
    return found


def _parsed(obj: object) -> NumpyDocString:
    return NumpyDocString(inspect.getdoc(obj) or "")


def _returns_value(signature: inspect.Signature) -> bool:
    annotation = signature.return_annotation
    if annotation is inspect.Signature.empty or annotation in (None, type(None)):
        return False
    if isinstance(annotation, str):
        return annotation.strip().lower() not in _NONE_ANNOTATIONS
    return True


def _object_id(obj: object) -> str:
    return f"{obj.__module__}.{obj.__qualname__}"


_DOCUMENTABLE = _collect_documentable()


def test_package_walk_finds_every_subpackage() -> None:
    """Every subpackage is reachable by the package walk."""
    modules = {module.__name__ for module in _iter_modules(matchcast)}
    for expected in (
        "matchcast.engine.match_engine",
        "matchcast.models.team",
        "matchcast.utils.roster",
        "matchcast.visualizer.visualizer",
    ):
        assert expected in modules


@pytest.mark.parametrize("obj", _DOCUMENTABLE, ids=_object_id)
def test_parameters_are_documented(obj: object) -> None:
    """Assert that every parameter in the signature is described in the docstring."""
    wanted = [
        p.name
        for p in inspect.signature(obj).parameters.values()
        if p.kind not in (p.VAR_POSITIONAL, p.VAR_KEYWORD) and p.name not in {"self", "cls"}
    ]
    if not wanted:
        pytest.skip("No parameters requiring documentation")

    documented = {name for name, _, _ in _parsed(obj)["Parameters"]}
    missing = [name for name in wanted if name not in documented]
    assert not missing, f"Docstring for {_object_id(obj)} is missing parameter entries: {', '.join(missing)}"


@pytest.mark.parametrize("obj", _DOCUMENTABLE, ids=_object_id)
def test_returns_are_documented(obj: object) -> None:
    """Require a Returns section whenever the callable annotates a non-None value."""
    if inspect.isclass(obj) or not _returns_value(inspect.signature(obj)):
        pytest.skip("Return value does not require documentation")

    assert _parsed(obj)["Returns"], f"Docstring for {_object_id(obj)} is missing a Returns section"
