import pytest

from gvwire.conf.get_settings import get_global_settings
from gvwire.context import ByteOrder, EncodingContext
from gvwire.exceptions import IncorrectTypeError, MaxDepthExceededError


def test_copy_for_child_keeps_everything_but_depth() -> None:
    ctx = EncodingContext(byte_order=ByteOrder.BIG, max_depth=5, max_array_length=100, allow_empty_arrays=True)
    child = ctx.copy_for_child()
    assert child.depth == 1
    assert child.byte_order is ByteOrder.BIG
    assert child.max_depth == 5
    assert child.max_array_length == 100
    assert child.allow_empty_arrays is True
    # the parent is not modified
    assert ctx.depth == 0


def test_max_depth() -> None:
    ctx = EncodingContext(max_depth=3)
    for _ in range(3):
        ctx = ctx.copy_for_child()
    assert ctx.depth == 3
    with pytest.raises(MaxDepthExceededError):
        ctx.copy_for_child()
    # nesting errors are type errors
    with pytest.raises(IncorrectTypeError):
        ctx.copy_for_child()


def test_struct_formats() -> None:
    assert EncodingContext(byte_order=ByteOrder.LITTLE).struct_format('I') == '<I'
    assert EncodingContext(byte_order=ByteOrder.BIG).struct_format('I') == '>I'
    assert EncodingContext(byte_order=ByteOrder.NATIVE).struct_format('I') == '=I'


def test_default_comes_from_settings() -> None:
    settings = get_global_settings()
    ctx = EncodingContext.default()
    assert ctx.byte_order == settings.DEFAULT_BYTE_ORDER
    assert ctx.max_depth == settings.MAX_DEPTH
    assert ctx.max_array_length == settings.MAX_ARRAY_LENGTH
    assert ctx.allow_empty_arrays == settings.ALLOW_EMPTY_ARRAYS
    assert EncodingContext.default(byte_order=ByteOrder.BIG).byte_order is ByteOrder.BIG
