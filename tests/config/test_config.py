import json
from pathlib import Path

import pytest

from online_learning.config import RunConfig, TeacherConfig
from online_learning.cost import LeastAbsoluteDeviation, LeastSquares
from online_learning.model import Constant
from online_learning.teacher import Adagrad, GradientDescent, Momentum, Nesterov
from online_learning.train import learn_from_config


def test_teacher_config_builds_requested_teacher() -> None:
    teacher = TeacherConfig.from_dict({"kind": "momentum", "l0": 0.1, "t": 10, "inertia": 0.9}).build()
    assert teacher == Momentum(l0=0.1, t=10.0, inertia=0.9)
    assert TeacherConfig(kind="adagrad", learning_rate=0.5, epsilon=1e-8).build() == Adagrad(0.5, 1e-8)
    assert isinstance(TeacherConfig(kind="nesterov", l0=1, t=2, inertia=0.5).build(), Nesterov)


def test_teacher_config_validation() -> None:
    with pytest.raises(ValueError):
        TeacherConfig(kind="rmsprop", learning_rate=0.1)
    with pytest.raises(ValueError):
        TeacherConfig(kind="gradient_descent_annealed", l0=0.1)  # missing t
    with pytest.raises(ValueError):
        TeacherConfig(kind="gradient_descent", learning_rate=-1.0)
    with pytest.raises(ValueError):
        TeacherConfig.from_dict({"kind": "gradient_descent", "learning_rate": 0.1, "momentum": 0.9})
    with pytest.raises(ValueError):
        TeacherConfig.from_dict({})
    # inertia is deliberately not range checked
    assert TeacherConfig(kind="momentum", l0=0.1, t=1.0, inertia=1.5).inertia == 1.5


def test_run_config_defaults() -> None:
    config = RunConfig.from_dict(None)
    assert config.build_teacher() == GradientDescent(learning_rate=0.1)
    assert isinstance(config.build_cost(), LeastSquares)
    assert config.num_events is None


def test_run_config_from_file(tmp_path: Path) -> None:
    path = tmp_path / "run.json"
    path.write_text(
        json.dumps(
            {
                "teacher": {"kind": "gradient_descent_annealed", "l0": 0.9, "t": 9.0},
                "cost": "least_absolute_deviation",
                "num_events": 150,
            }
        )
    )
    config = RunConfig.from_file(path)
    assert config.num_events == 150
    assert isinstance(config.build_cost(), LeastAbsoluteDeviation)

    model = Constant(0.0)
    history = [(None, truth) for truth in (1.0, 3.0, 4.0, 7.0, 8.0, 11.0, 29.0)]
    training = learn_from_config(config, model, history)
    assert training.num_events == 150
    assert 6.9 < model.c < 7.1


def test_run_config_rejects_bad_input(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        RunConfig.from_dict({"cost": "hinge"})
    with pytest.raises(ValueError):
        RunConfig.from_dict({"num_events": -3})
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(ValueError):
        RunConfig.from_file(path)


def test_run_config_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "run.yaml"
    path.write_text(
        "teacher:\n"
        "  kind: nesterov\n"
        "  l0: 0.05\n"
        "  t: 1000\n"
        "  inertia: 0.5\n"
        "cost: max_likelihood\n"
    )
    config = RunConfig.from_file(path)
    assert config.build_teacher() == Nesterov(l0=0.05, t=1000.0, inertia=0.5)
    assert config.cost == "max_likelihood"
    broken = tmp_path / "broken.yml"
    broken.write_text("teacher: [unclosed")
    with pytest.raises(ValueError):
        RunConfig.from_file(broken)
