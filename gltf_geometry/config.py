from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np

from .cast import resolve_dtype


class BindingPolicy(Enum):
    # one binding per semantic name across the document; later primitives replace earlier ones
    LAST_WINS = "last"
    # every primitive contributes, indices rebased onto the running vertex count
    CONCATENATE = "concat"


@dataclass(frozen=True)
class DecodeOptions:
    index_dtype: Any = np.int32
    position_dtype: Any = np.float64
    honor_byte_stride: bool = True
    strict_component_types: bool = False
    binding_policy: BindingPolicy = field(default=BindingPolicy.LAST_WINS)

    def __post_init__(self) -> None:
        object.__setattr__(self, "index_dtype", resolve_dtype(self.index_dtype))
        object.__setattr__(self, "position_dtype", resolve_dtype(self.position_dtype))
        object.__setattr__(self, "binding_policy", BindingPolicy(self.binding_policy))


DEFAULT_OPTIONS = DecodeOptions()
