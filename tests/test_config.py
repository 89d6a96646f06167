from __future__ import annotations

import pytest

from htmlstruct.config import Config, config


def test_default_configuration_is_valid() -> None:
    config.validate()

    assert Config().TAG_KEY == config.TAG_KEY


@pytest.mark.parametrize(
    "overrides",
    [
        {"TAG_KEY": "not a key"},
        {"TAG_KEY": ""},
        {"TAG_METADATA": ""},
        {"SKIP_SENTINEL": ""},
        {"NESTED_SUFFIX": ""},
        {"ID_MARKER": ""},
    ],
)
def test_validate_rejects_bad_settings(overrides: dict) -> None:
    with pytest.raises(ValueError):
        Config(**overrides).validate()


def test_is_skipped() -> None:
    settings = Config(SKIP_SENTINEL="-", NESTED_SUFFIX="[..]")

    assert settings.is_skipped("-")
    assert settings.is_skipped("//related[..]")
    assert not settings.is_skipped("//h1")
    assert not settings.is_skipped("-//h1")
