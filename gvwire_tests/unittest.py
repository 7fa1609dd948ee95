import secrets
from random import Random
from typing import Optional
from unittest import main as ut_main

from structlog import get_logger
from twisted.trial import unittest

from gvwire.conf.get_settings import get_global_settings
from gvwire.context import ByteOrder, EncodingContext
from gvwire.shared_data import SharedData
from gvwire.variant_type import VariantType

logger = get_logger()
main = ut_main


class TestCase(unittest.TestCase):
    seed_config: Optional[int] = None

    def setUp(self) -> None:
        self.log = logger.new()
        self.seed = secrets.randbits(64) if self.seed_config is None else self.seed_config
        self.log.info('set seed', seed=self.seed)
        self.rng = Random(self.seed)
        self._settings = get_global_settings()

    def context(self, byte_order: ByteOrder = ByteOrder.LITTLE, **kwargs) -> EncodingContext:
        return EncodingContext(byte_order=byte_order, **kwargs)

    def encode(self, value: VariantType, context: Optional[EncodingContext] = None) -> bytes:
        return value.to_bytes(context or self.context())

    def assertRoundTrip(self, value: VariantType, context: Optional[EncodingContext] = None) -> bytes:
        """ Encode, slice and decode a value, checking the decoded value and the extents agree.
        """
        context = context or self.context()
        signature = value.signature()
        data = value.to_bytes(context)
        view = SharedData(data)
        extent = type(value).slice_data(view, signature, context)
        self.assertEqual(len(extent), len(data))
        decoded = type(value).decode(view, signature, context)
        self.assertEqual(decoded, value)
        self.assertEqual(decoded.signature(), signature)
        return data
