import json
import os
import logging

import orjson
from appdirs import user_config_dir

logger = logging.getLogger(__name__)

NAME_TO_LOGGING_LEVEL = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL,
}


def get_package_name():
    '''
    returns 'vn-ime-core'
    '''
    return 'vn-ime-core'


def get_version():
    return '0.0.1'


def get_datadir():
    '''
    Return the path to the data directory holding the default config.json
    and input_methods.json. VN_IME_CORE_DATADIR overrides the location
    next to the source tree.
    '''
    datadir = os.environ.get('VN_IME_CORE_DATADIR')
    if datadir:
        return datadir
    return os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'data')


def get_default_config_path():
    '''
    Return the path to the default config file.
    This is the config.json that gets copied to user's config dir on first run.
    '''
    return os.path.join(get_datadir(), 'config.json')


def get_user_config_dir():
    '''
    Return the path to the config directory under $HOME.
    Typically, it would be $HOME/.config/vn-ime-core
    '''
    return user_config_dir(get_package_name())


def _add_warning(warnings, warning_msg):
    logger.warning(warning_msg)
    return warnings + ("\n" if warnings else "") + warning_msg


def get_config_data():
    '''
    This function is to load the config JSON file from the HOME/.config/vn-ime-core
    When the file is not present (e.g., on first use), it will copy
    the default config.json from the data directory.

    Returns:
        tuple: (config_data, warnings_string) where warnings_string is empty if no warnings
    '''
    configfile_path = os.path.join(get_user_config_dir(), 'config.json')
    default_config = get_default_config_data()
    if default_config is None:
        return {}, f'Default config.json is missing or invalid under {get_datadir()}'
    warnings = ""

    if not os.path.exists(configfile_path):
        warnings = _add_warning(warnings, f'config.json is not found under {get_user_config_dir()} . '
                                          f'Copying the default config.json from {get_default_config_path()} ..')
        save_config_data(default_config)
        return default_config, warnings
    try:
        with open(configfile_path, encoding='utf-8') as f:
            config_data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error(f'Error loading the config.json under {get_user_config_dir()}')
        logger.error(e)
        logger.error(f'Using (but not copying) the default config.json from {get_default_config_path()} ..')
        return default_config, warnings

    if not isinstance(config_data, dict):
        warnings = _add_warning(warnings, f'config.json under {get_user_config_dir()} is not a JSON object. Using the default config.json')
        return default_config, warnings

    for k in default_config:
        if k not in config_data:
            warnings = _add_warning(warnings, f'The key "{k}" was not found in the config.json under {get_user_config_dir()} . '
                                              f'Copying the default key-value')
            config_data[k] = default_config[k]
        if type(config_data[k]) != type(default_config[k]):
            warnings = _add_warning(warnings, f'Type mismatch found for the key "{k}" between config.json under {get_user_config_dir()} '
                                              f'and default config.json. Replacing the value of this key with the value in default config.json')
            config_data[k] = default_config[k]

    # entries of "dictionaries" must be paths
    dictionaries = [d for d in config_data['dictionaries'] if isinstance(d, str)]
    if len(dictionaries) != len(config_data['dictionaries']):
        warnings = _add_warning(warnings, 'Dropping non-string entries from "dictionaries".')
        config_data['dictionaries'] = dictionaries

    return config_data, warnings


def save_config_data(config_data):
    '''
    Save config data to the user config directory.

    Args:
        config_data: Dictionary containing configuration data to save

    Returns:
        bool: True if save was successful, False otherwise
    '''
    configfile_path = os.path.join(get_user_config_dir(), 'config.json')

    try:
        os.makedirs(get_user_config_dir(), exist_ok=True)
        with open(configfile_path, 'w', encoding='utf-8') as f:
            json.dump(config_data, f, ensure_ascii=False, indent=2)
        logger.info(f'Configuration saved successfully to {configfile_path}')
        return True
    except OSError as e:
        logger.error(f'Error saving config.json to {configfile_path}')
        logger.error(e)
        return False


def get_default_config_data():
    default_config_path = get_default_config_path()
    if not os.path.exists(default_config_path):
        logger.error(f'config.json is not found under {get_datadir()}. Please check that installation was done without problem!')
        return None
    try:
        with open(default_config_path, encoding='utf-8') as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f'Error loading the default config.json under {get_datadir()}')
        logger.error(e)
        return None


def get_logging_level(config):
    '''
    Return the logging level name from the config.
    When the value is not present (or incorrect), WARNING is used as default.
    '''
    level = config.get('logging_level', 'WARNING')
    if level not in NAME_TO_LOGGING_LEVEL:
        logger.warning(f'Specified logging level {level} is not recognized. Using the default WARNING level.')
        level = 'WARNING'
    return level


def get_input_method_data():
    '''
    Load input method definitions ({name: {key: spec}}).
    A copy under the user config dir takes precedence over the default one.
    '''
    file_name = 'input_methods.json'
    user_path = os.path.join(get_user_config_dir(), file_name)
    if os.path.exists(user_path):
        file_path = user_path
    else:
        file_path = os.path.join(get_datadir(), file_name)
    try:
        with open(file_path, encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error(f'Error in loading input method file: {file_path}')
        logger.error(e)
        return None
    if not isinstance(data, dict):
        logger.error(f'Invalid input method file (expected an object): {file_path}')
        return None
    return data


def load_word_list(file_path):
    '''
    Load the words of one dictionary file.

    .json files hold either a list of words or an object keyed by word;
    any other file is UTF-8 text with one word per line, where blank lines
    and lines starting with "#" are skipped.

    Returns:
        list: The words, or an empty list when the file cannot be read.
    '''
    if not os.path.exists(file_path):
        logger.warning(f'Dictionary file not found: {file_path}')
        return []

    try:
        if file_path.endswith('.json'):
            with open(file_path, 'rb') as f:
                data = orjson.loads(f.read())
            if isinstance(data, dict):
                data = list(data.keys())
            if not isinstance(data, list):
                logger.warning(f'Invalid dictionary format (expected list or dict): {file_path}')
                return []
            words = [w.strip() for w in data if isinstance(w, str) and w.strip()]
        else:
            with open(file_path, encoding='utf-8') as f:
                words = [line.strip() for line in f if line.strip() and not line.lstrip().startswith('#')]
    except orjson.JSONDecodeError as e:
        logger.error(f'Failed to parse dictionary JSON: {file_path} - {e}')
        return []
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f'Failed to load dictionary: {file_path} - {e}')
        return []

    logger.info(f'Loaded dictionary: {file_path} ({len(words)} words)')
    return words


def load_word_lists(file_paths):
    words = []
    for file_path in file_paths:
        words.extend(load_word_list(file_path))
    return words
