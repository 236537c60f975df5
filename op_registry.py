# logistics/op_registry.py
# Purpose: Registry of file operation executors with Pydantic validation and auto-discovery.
from __future__ import annotations

import importlib
import logging
import pkgutil
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Type

from pydantic import BaseModel, ValidationError

logger = logging.getLogger("logistics.operations")


class OperationError(Exception): ...


@dataclass(slots=True)
class OpSpec:
    """Lightweight descriptor for a single operation executor."""

    name: str
    model: Type[BaseModel]
    handler: Callable[..., Any]


class OperationRegistry:
    def __init__(self):
        self._ops: Dict[str, Callable[..., Any]] = {}
        self._models: Dict[str, Type[BaseModel]] = {}

    def register(
        self,
        name: str,
        fn: Callable[..., Any],
        *,
        model: Type[BaseModel],
    ) -> None:
        if not name or not isinstance(name, str):
            raise OperationError("Operation name must be non-empty str")
        if name in self._ops:
            raise OperationError(f"Operation already registered: {name}")
        if not callable(fn):
            raise OperationError("Operation handler must be callable")
        if not (isinstance(model, type) and issubclass(model, BaseModel)):
            raise OperationError("Operation must declare a Pydantic BaseModel via model=")
        self._ops[name] = fn
        self._models[name] = model

    def register_spec(self, spec: OpSpec, *, module: Optional[str] = None) -> None:
        try:
            self.register(spec.name, spec.handler, model=spec.model)
        except OperationError as exc:
            if "already registered" in str(exc):
                return
            context = f" from {module}" if module else ""
            raise OperationError(f"Failed to register {spec.name}{context}: {exc}") from exc

    def get(self, name: str) -> Callable[..., Any]:
        try:
            return self._ops[name]
        except KeyError as exc:
            raise OperationError(f"Unknown operation: {name}") from exc

    def get_model(self, name: str) -> Type[BaseModel]:
        try:
            return self._models[name]
        except KeyError as exc:
            raise OperationError(f"Unknown operation (no model): {name}") from exc

    def call(self, name: str, **kwargs) -> Any:
        fn = self.get(name)
        model = self.get_model(name)
        try:
            payload = model(**(kwargs or {}))
        except ValidationError as e:
            raise OperationError(f"Validation failed for {name}: {e}") from e
        logger.info("running operation %s", name)
        # dict() keeps nested models such as ConfinedPath intact.
        return fn(**dict(payload))

    def __contains__(self, name: object) -> bool:
        return name in self._ops

    def list(self) -> List[str]:
        return sorted(self._ops.keys())


registry = OperationRegistry()


def _extract_specs(module: Any) -> Iterable[OpSpec]:
    op_obj = getattr(module, "OPERATION", None)
    return [op_obj] if isinstance(op_obj, OpSpec) else []


def autodiscover_operations(
    package: str = "operations", target: Optional[OperationRegistry] = None
) -> OperationRegistry:
    target = target if target is not None else registry
    pkg = importlib.import_module(package)
    for modinfo in pkgutil.iter_modules(pkg.__path__, pkg.__name__ + "."):
        short_name = modinfo.name.rsplit(".", 1)[-1]
        if short_name.startswith("_"):
            continue
        module = importlib.import_module(modinfo.name)
        for spec in _extract_specs(module):
            target.register_spec(spec, module=modinfo.name)
    return target
