"""
Lexically scoped variable bindings.

An Environment maps names to runtime values and links outward to the
scope it was created in. Lookups walk outward; bindings are always made
in the current scope, so an inner ``let`` shadows rather than mutates an
outer binding. Links only point outward: a closure keeps its defining
scope alive by holding a reference to it, and nothing points back in.
"""

from __future__ import annotations

from cacti.core.ir.objects import Obj


class Environment:
    """A single scope in an environment chain."""

    def __init__(self, outer: Environment | None = None) -> None:
        self.store: dict[str, Obj] = {}
        self.outer = outer

    @classmethod
    def enclosed(cls, outer: Environment) -> Environment:
        """Create a child scope of ``outer`` (one per function invocation)."""
        return cls(outer=outer)

    def get(self, name: str) -> Obj | None:
        """Resolve ``name`` innermost-first; None if no scope binds it."""
        env: Environment | None = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name: str, value: Obj) -> Obj:
        """Bind ``name`` in this scope."""
        self.store[name] = value
        return value

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __repr__(self) -> str:
        names = ", ".join(sorted(self.store))
        return f"Environment([{names}], outer={'yes' if self.outer else 'no'})"
