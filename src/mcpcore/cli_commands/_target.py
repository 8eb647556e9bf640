"""Resolve a ``module:attribute`` target into a :class:`Server`."""

from __future__ import annotations

import importlib

import click

from mcpcore.server import Server


def load_server(target: str) -> Server:
    """Import *target* and return the server it names.

    The attribute may be a :class:`Server` or a zero-argument callable that
    returns one.  Dotted attribute paths (``pkg.mod:app.server``) are followed.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise click.BadParameter(f"expected 'module:attribute', got {target!r}", param_hint="TARGET")

    try:
        obj: object = importlib.import_module(module_name)
    except ImportError as exc:
        raise click.BadParameter(f"cannot import {module_name!r}: {exc}", param_hint="TARGET") from exc

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise click.BadParameter(f"{target!r} has no attribute {part!r}", param_hint="TARGET") from exc

    if not isinstance(obj, Server) and callable(obj):
        obj = obj()
    if not isinstance(obj, Server):
        raise click.BadParameter(
            f"{target!r} is a {type(obj).__name__}, not a Server", param_hint="TARGET"
        )
    return obj
