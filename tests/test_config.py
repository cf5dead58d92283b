import pytest

from changepack.diff import DiffConfig, DiffConfigError


def test_defaults() -> None:
    config = DiffConfig()

    assert config.max_nodes is None
    assert config.scalar_types == ()
    assert config.include_private is False


def test_scalar_types_are_normalized_to_tuple() -> None:
    assert DiffConfig(scalar_types=[int, str]).scalar_types == (int, str)


@pytest.mark.parametrize("max_nodes", [0, -1, True, "10"])
def test_invalid_max_nodes(max_nodes: object) -> None:
    with pytest.raises(DiffConfigError, match="max_nodes"):
        DiffConfig(max_nodes=max_nodes)


def test_scalar_types_must_be_types() -> None:
    with pytest.raises(DiffConfigError, match="scalar_types"):
        DiffConfig(scalar_types=("str",))


def test_include_private_must_be_boolean() -> None:
    with pytest.raises(DiffConfigError, match="include_private"):
        DiffConfig(include_private=1)
