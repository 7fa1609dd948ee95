import doctest
import importlib

import pytest

MODULES_WITH_EXAMPLES = [
    'gvwire.array',
    'gvwire.boxed',
    'gvwire.codec',
    'gvwire.context',
    'gvwire.dict_entry',
    'gvwire.shared_data',
    'gvwire.signature',
    'gvwire.simple_types',
    'gvwire.string_types',
    'gvwire.structure',
    'gvwire.utils.dict',
]


@pytest.mark.parametrize('module_name', MODULES_WITH_EXAMPLES)
def test_module_examples(module_name: str) -> None:
    module = importlib.import_module(module_name)
    result = doctest.testmod(module)
    assert result.attempted > 0
    assert result.failed == 0
