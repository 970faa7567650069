"""Dataclass configuration for teachers and training runs."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

import yaml

from online_learning.cost import Cost
from online_learning.registry import CostRegistry, TeacherRegistry
from online_learning.teacher import Teacher

TEACHER_PARAMETERS: Dict[str, Tuple[str, ...]] = {
    "gradient_descent": ("learning_rate",),
    "gradient_descent_annealed": ("l0", "t"),
    "momentum": ("l0", "t", "inertia"),
    "nesterov": ("l0", "t", "inertia"),
    "adagrad": ("learning_rate", "epsilon"),
}

_POSITIVE_PARAMETERS = ("learning_rate", "l0", "t", "epsilon")


@dataclass
class TeacherConfig:
    """Hyper parameters for one of the built-in teachers.

    Only the parameters the chosen ``kind`` needs have to be set; see
    ``TEACHER_PARAMETERS``. ``inertia`` is not range checked.
    """

    kind: str = "gradient_descent"
    learning_rate: Optional[float] = None
    l0: Optional[float] = None
    t: Optional[float] = None
    inertia: Optional[float] = None
    epsilon: Optional[float] = None

    def __post_init__(self) -> None:
        if self.kind not in TEACHER_PARAMETERS:
            raise ValueError(f"Unknown teacher kind '{self.kind}'")
        for name in TEACHER_PARAMETERS[self.kind]:
            value = getattr(self, name)
            if value is None:
                raise ValueError(f"Teacher '{self.kind}' requires '{name}'")
            value = float(value)
            if name in _POSITIVE_PARAMETERS and value <= 0:
                raise ValueError(f"Teacher parameter '{name}' must be positive")
            setattr(self, name, value)

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> "TeacherConfig":
        if not data:
            raise ValueError("Teacher config must not be empty")
        unknown = set(data) - {"kind", "learning_rate", "l0", "t", "inertia", "epsilon"}
        if unknown:
            raise ValueError(f"Unknown teacher config keys {sorted(unknown)}")
        return cls(**data)

    def parameters(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in TEACHER_PARAMETERS[self.kind]}

    def build(self, registry: Optional[TeacherRegistry] = None) -> Teacher:
        registry = registry or TeacherRegistry()
        return registry.create(self.kind, **self.parameters())


@dataclass
class RunConfig:
    """Teacher, cost and history length of a training run."""

    teacher: TeacherConfig = field(default_factory=lambda: TeacherConfig(learning_rate=0.1))
    cost: str = "least_squares"
    num_events: Optional[int] = None

    @classmethod
    def from_file(cls, path: Path) -> "RunConfig":
        """Load a run config from JSON, or YAML when the suffix is ``.yaml``/``.yml``."""
        path = Path(path)
        text = path.read_text()
        if path.suffix in (".yaml", ".yml"):
            try:
                data = yaml.safe_load(text)
            except yaml.YAMLError as exc:
                raise ValueError(f"Invalid run config YAML at {path}: {exc}") from exc
        else:
            try:
                data = json.loads(text)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid run config JSON at {path}: {exc}") from exc
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> "RunConfig":
        if data is None:
            return cls()
        teacher = TeacherConfig.from_dict(data["teacher"]) if "teacher" in data else TeacherConfig(learning_rate=0.1)
        cost = str(data.get("cost", "least_squares"))
        if cost not in CostRegistry():
            raise ValueError(f"Unknown cost '{cost}'")
        num_events = data.get("num_events")
        if num_events is not None:
            num_events = int(num_events)
            if num_events < 0:
                raise ValueError("num_events must be non-negative")
        return cls(
            teacher=teacher,
            cost=cost,
            num_events=num_events,
        )

    def build_teacher(self) -> Teacher:
        return self.teacher.build()

    def build_cost(self, registry: Optional[CostRegistry] = None) -> Cost:
        registry = registry or CostRegistry()
        return registry.create(self.cost)
