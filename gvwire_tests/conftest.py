import os

from gvwire.conf import UNITTESTS_SETTINGS_FILEPATH

os.environ['GVWIRE_CONFIG_YAML'] = os.environ.get('GVWIRE_TEST_CONFIG_YAML', UNITTESTS_SETTINGS_FILEPATH)
