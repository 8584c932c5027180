from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass
class TranslationScope:
    """Label namespace shared by the flow and function generators."""
    function: Optional[str] = None

    def reset(self) -> None:
        self.function = None

    def prefix(self, module_name: str) -> str:
        # labels before the first `function` of a module belong to the module
        return self.function if self.function else module_name

    def label(self, name: str, module_name: str) -> str:
        return f"{self.prefix(module_name)}${name}"


def internal_label(prefix: str, kind: str, n: int) -> str:
    # `$$` cannot come out of label(): VM symbols never contain `$`
    return f"{prefix}$${kind}.{n}"
