import argparse

import pytest

from procnet_watch.config import DEFAULT_INTERVAL, init_cfg_from_args
from procnet_watch.main import build, parse_args
from procnet_watch.tracking.cycle import NamedObservationCycle, ObservationCycle


def test_no_names_selects_default_mode():
    cfg = init_cfg_from_args(parse_args([]))

    assert not cfg.named_mode
    assert cfg.interval == DEFAULT_INTERVAL
    assert type(build(cfg)) is ObservationCycle


def test_names_select_named_mode():
    cfg = init_cfg_from_args(parse_args(["w3svc", "DefaultAppPool", "--interval", "5", "--appcmd", "x.exe"]))

    cycle = build(cfg)

    assert cfg.named_mode
    assert isinstance(cycle, NamedObservationCycle)
    assert [t.name for t in cycle.tracker.targets] == ["w3svc", "DefaultAppPool"]
    assert cycle.tracker.resolver.registry.appcmd == "x.exe"
    assert cfg.interval == 5.0


def test_targets_file_selects_named_mode(tmp_path):
    p = tmp_path / "t.yaml"
    p.write_text("- name: pool\n  hosting: slot\n", encoding="utf-8")

    cycle = build(init_cfg_from_args(parse_args(["--targets", str(p)])))

    assert [t.name for t in cycle.tracker.targets] == ["pool"]


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        init_cfg_from_args(argparse.Namespace(interval=0))
