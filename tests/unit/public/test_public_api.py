from __future__ import annotations

import inspect

import wonderbox
from wonderbox import Container, resolve_dependencies


def test_public_exports_are_importable() -> None:
    for name in wonderbox.__all__:
        assert hasattr(wonderbox, name), name


def test_autoresolvable_is_an_alias_of_resolve_dependencies() -> None:
    assert wonderbox.autoresolvable is resolve_dependencies


def test_container_public_methods() -> None:
    public_methods = {
        name
        for name, member in inspect.getmembers(Container, inspect.isfunction)
        if not name.startswith("_")
    }

    assert public_methods == {
        "is_registered",
        "register_autoresolvable",
        "register_autoresolved",
        "register_clone",
        "register_factory",
        "resolve",
        "try_resolve",
    }


def test_registration_options_are_keyword_only() -> None:
    for method_name, keyword_only in {
        "register_clone": {"provides", "clone"},
        "register_factory": {"provides"},
        "register_autoresolvable": {"provides"},
        "register_autoresolved": {"dependency", "provides", "lazy", "clone"},
    }.items():
        parameters = inspect.signature(getattr(Container, method_name)).parameters
        assert {
            name
            for name, parameter in parameters.items()
            if parameter.kind is inspect.Parameter.KEYWORD_ONLY
        } == keyword_only, method_name


def test_public_api_has_docstrings() -> None:
    for name in wonderbox.__all__:
        assert inspect.getdoc(getattr(wonderbox, name)), name
