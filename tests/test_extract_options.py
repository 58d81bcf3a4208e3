import dataclasses

import pytest

from ragparsers.core.functions.extract_output import (
    DEFAULT_WORKSHEET_TEMPLATE,
    ExtractOptions,
)


def test_defaults():
    options = ExtractOptions()
    assert not options.extract_images
    assert options.extract_tables
    assert not options.extract_page_images
    assert not options.extract_comments
    assert not options.extract_revision_content
    assert options.with_quotes
    assert options.worksheet_number_template == DEFAULT_WORKSHEET_TEMPLATE
    assert options.proximity_threshold == 60


def test_from_dict_ignores_unknown_keys():
    options = ExtractOptions.from_dict({"extract_images": True, "ocr": True})
    assert options.extract_images
    assert not hasattr(options, "ocr")


def test_from_dict_none_template_uses_default():
    options = ExtractOptions.from_dict({"worksheet_number_template": None})
    assert options.worksheet_number_template == DEFAULT_WORKSHEET_TEMPLATE
    assert ExtractOptions.from_dict(None) == ExtractOptions()


def test_options_are_immutable():
    options = ExtractOptions()
    with pytest.raises(dataclasses.FrozenInstanceError):
        options.extract_images = True

    changed = options.with_overrides(extract_images=True)
    assert changed.extract_images
    assert not options.extract_images
