"""
Rule Module Registry - Thread-safe rule module management.

This module provides the RuleModuleRegistry class which manages a collection
of rule modules in a thread-safe manner. Modules can be added, removed,
enabled or disabled while another thread is evaluating.

Thread Safety:
- Uses threading.Lock for protecting module dict mutations
- Snapshot pattern for snapshot() to minimize lock holding time
- Evaluation happens outside the lock
"""

import threading
from dataclasses import dataclass
from typing import Dict, List

from vastu_advisor.modules import RuleModule


@dataclass
class ManagedModule:
    """Rule module plus its enabled flag."""

    module: RuleModule
    enabled: bool = True

    @property
    def name(self) -> str:
        return self.module.name


class RuleModuleRegistry:
    """
    Thread-safe registry for rule modules.

    Modules are kept in registration order; snapshot() returns the enabled
    ones in that order.

    Thread Safety Guarantees:
    - add(), remove(), enable(), disable(), clear(): Write operations (acquire lock)
    - snapshot(), list_modules(), count(): Read operations (acquire lock briefly)

    Usage:
        registry = RuleModuleRegistry()
        registry.add(SectorIdealModule("sector_ideals", ideals))

        for module in registry.snapshot():
            result = module.evaluate(coverage)
    """

    def __init__(self):
        """Initialize empty registry."""
        self._modules: Dict[str, ManagedModule] = {}
        self._lock = threading.Lock()

    def add(self, module: RuleModule, enabled: bool = True) -> None:
        """
        Add a rule module.

        Args:
            module: Object with a name and evaluate(coverage)
            enabled: Initial enabled flag

        Raises:
            ValueError: If a module with the same name already exists
            TypeError: If module does not follow the RuleModule contract

        Thread-safe: Acquires lock for write operation.
        """
        if not isinstance(module, RuleModule):
            raise TypeError(f"Not a rule module: {type(module).__name__}")

        with self._lock:
            if module.name in self._modules:
                raise ValueError(f"Rule module '{module.name}' already exists")
            self._modules[module.name] = ManagedModule(module=module, enabled=enabled)

    def remove(self, name: str) -> None:
        """
        Remove a rule module.

        Raises:
            KeyError: If name does not exist

        Thread-safe: Acquires lock for write operation.
        """
        with self._lock:
            if name not in self._modules:
                raise KeyError(f"Rule module '{name}' not found")
            del self._modules[name]

    def enable(self, name: str) -> None:
        """
        Enable a rule module.

        Raises:
            KeyError: If name does not exist
        """
        with self._lock:
            if name not in self._modules:
                raise KeyError(f"Rule module '{name}' not found")
            self._modules[name].enabled = True

    def disable(self, name: str) -> None:
        """
        Disable a rule module.

        Raises:
            KeyError: If name does not exist
        """
        with self._lock:
            if name not in self._modules:
                raise KeyError(f"Rule module '{name}' not found")
            self._modules[name].enabled = False

    def snapshot(self) -> List[RuleModule]:
        """
        Enabled modules, in registration order.

        Thread-safe: Copies references under the lock; callers evaluate
        outside it.
        """
        with self._lock:
            return [
                managed.module
                for managed in self._modules.values()
                if managed.enabled
            ]

    def list_modules(self) -> Dict[str, bool]:
        """
        List all modules and their enabled status.

        Thread-safe: Acquires lock for read operation.
        """
        with self._lock:
            return {
                name: managed.enabled
                for name, managed in self._modules.items()
            }

    def clear(self) -> None:
        """Remove all modules."""
        with self._lock:
            self._modules.clear()

    def count(self) -> int:
        """Number of modules (enabled + disabled)."""
        with self._lock:
            return len(self._modules)
