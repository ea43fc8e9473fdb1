import os

from flatcodec.conf import UNITTESTS_SETTINGS_FILEPATH
from flatcodec.conf.get_settings import CONFIG_YAML_ENV_VAR
from flatcodec.logging import LoggingOutput, setup_logging

os.environ[CONFIG_YAML_ENV_VAR] = os.environ.get('FLATCODEC_TEST_CONFIG_YAML', UNITTESTS_SETTINGS_FILEPATH)

setup_logging(logging_output=LoggingOutput.NULL, _test_logging=True)
