"""
propgraph Test Configuration and Fixtures

Provides the reference property set used across unit and integration tests:

    p(i, _)                          = i + 1
    q(i, {p}) when p > 0             = i * 5
    q(i, {p: 3})                     = i * 5
    q(i, {p})                        = p * i
    r(_, {p, q, z})                  = p * q
    z(_, {q})                        = q * 5

Evaluating input 2 yields {p: 3, q: 10, r: 30, z: 50}.
"""

import pytest

from propgraph.bootstrap.config import EngineConfig, reset_config
from propgraph.core.declarations import PropertyDeclaration, clause
from propgraph.surface import ANY, PropertySet, match


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep tests independent of the caller's environment and config files."""
    for var in (
        "PROPGRAPH_DISPATCH_SNAPSHOT",
        "PROPGRAPH_ALLOW_UNDECLARED",
        "PROPGRAPH_MAX_WORKERS",
        "PROPGRAPH_LOG_LEVEL",
        "PROPGRAPH_LOG_FILE",
        "PROPGRAPH_JSON_LOGS",
        "PROPGRAPH_ENVIRONMENT",
        "PROPGRAPH_DEBUG",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    reset_config()
    yield
    reset_config()


@pytest.fixture
def engine_config():
    """Default engine configuration."""
    return EngineConfig()


@pytest.fixture
def example_declarations():
    """Reference declarations, one PropertyDeclaration per property."""
    return [
        PropertyDeclaration("p", [
            clause(lambda i, _: i + 1),
        ]),
        PropertyDeclaration("q", [
            clause(
                lambda i, _: i * 5,
                pattern=match(p=ANY),
                when=lambda i, b: b["p"] > 0,
                requires={"p"},
            ),
            clause(lambda i, _: i * 5, pattern=match(p=3), requires={"p"}),
            clause(lambda i, r: r["p"] * i, pattern=match(p=ANY), requires={"p"}),
        ]),
        PropertyDeclaration("r", [
            clause(
                lambda _, r: r["p"] * r["q"],
                pattern=match(p=ANY, q=ANY, z=ANY),
                requires={"p", "q", "z"},
            ),
        ]),
        PropertyDeclaration("z", [
            clause(lambda _, r: r["q"] * 5, pattern=match(q=ANY), requires={"q"}),
        ]),
    ]


@pytest.fixture
def example_set():
    """Reference property set written with the PropertySet builder."""
    props = PropertySet("example")

    @props.define()
    def p(i, _):
        return i + 1

    @props.define(match(p=ANY), when=lambda i, b: b["p"] > 0)
    def q(i, _):
        return i * 5

    @props.define(match(p=3))
    def q(i, _):  # noqa: F811
        return i * 5

    @props.define(match(p=ANY))
    def q(i, r):  # noqa: F811
        return r["p"] * i

    @props.define(match(p=ANY, q=ANY, z=ANY))
    def r(_, r):
        return r["p"] * r["q"]

    @props.define(match(q=ANY))
    def z(_, r):
        return r["q"] * 5

    return props


@pytest.fixture
def expected_record():
    """Record produced by the reference set for input 2."""
    return {"p": 3, "q": 10, "r": 30, "z": 50}
