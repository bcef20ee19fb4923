"""Load another application for inspection (``debug --app MODULE:ATTR``)."""

from __future__ import annotations

import argparse
import importlib

from cmd_inspector.adapters import ParserRegistry
from cmd_inspector.exceptions import ApplicationLoadError
from cmd_inspector.protocols import Registry

__all__ = ["load_application", "as_registry"]


def load_application(target: str) -> Registry:
    """Import ``MODULE:ATTR`` and return it as an inspectable registry.

    ``ATTR`` may be dotted. If it names a zero-argument callable (a
    factory such as ``create_parser``), the callable is invoked.

    Raises:
        ApplicationLoadError: If the target cannot be imported or is not
            an application, parser, or registry.
    """
    module_name, _, attr_path = target.partition(":")
    if not module_name or not attr_path:
        raise ApplicationLoadError(
            f"Invalid application target '{target}'",
            context={"expected": "MODULE:ATTR"},
            suggestions=["Example: --app mypkg.cli:create_parser"],
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ApplicationLoadError(
            f"Cannot import module '{module_name}'",
            context={"target": target, "reason": str(e)},
            suggestions=["Check that the package is installed in this environment"],
        ) from e

    obj = module
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise ApplicationLoadError(
                f"Module '{module_name}' has no attribute '{attr_path}'",
                context={"target": target},
            ) from e

    if callable(obj) and not isinstance(obj, (type, argparse.ArgumentParser)):
        obj = obj()

    return as_registry(obj)


def as_registry(obj: object) -> Registry:
    """Wrap ``obj`` so the inspector can read it."""
    if isinstance(obj, argparse.ArgumentParser):
        return ParserRegistry(obj)
    if isinstance(obj, Registry):
        return obj
    raise ApplicationLoadError(
        "Unsupported application type",
        context={"type": type(obj).__name__},
        suggestions=[
            "Point --app at a ConsoleApplication, an argparse.ArgumentParser, "
            "or a function returning one"
        ],
    )
