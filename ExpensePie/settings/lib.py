"""Settings library for application preferences and category templates.

Provides:
    - Schema validation and enforcement for the in-memory settings structure.
    - Getting, setting and reverting settings sections.
    - The named color lookup table used by the category forms.
    - Constants for data columns and default categories.

Settings live for the lifetime of the process only and are never written to disk.
"""

import copy
import logging
import re
from typing import Dict, Any, List, Optional

from ..status import status

app_name: str = 'ExpensePie'


def is_valid_hex_color(value: str) -> bool:
    """Check if a string is a valid hexadecimal color in #RRGGBB format.

    Args:
        value (str): Color string to validate.

    Returns:
        bool: True if value matches '#RRGGBB', False otherwise.
    """
    return bool(re.fullmatch(r'#[0-9A-Fa-f]{6}', value))


# Name to #RRGGBB lookup, matching the system palette the categories were designed against
NAMED_COLORS: Dict[str, str] = {
    'red': '#FF3B30',
    'green': '#34C759',
    'blue': '#007AFF',
    'yellow': '#FFCC00',
    'orange': '#FF9500',
    'pink': '#FF2D55',
    'purple': '#AF52DE',
    'brown': '#A2845E',
    'gray': '#8E8E93',
    'black': '#000000',
    'white': '#FFFFFF',
}


def resolve_color(value: str) -> str:
    """Resolve a color name or hex string to a normalized '#RRGGBB' value.

    Args:
        value (str): A name from :data:`NAMED_COLORS` (case-insensitive) or a '#RRGGBB' string.

    Returns:
        str: Upper-case '#RRGGBB' color.

    Raises:
        ColorInvalidException: If the value is neither a known name nor a valid hex color.
    """
    if not isinstance(value, str):
        raise status.ColorInvalidException(f'Got {type(value)}.')

    v = value.strip()
    if v.lower() in NAMED_COLORS:
        return NAMED_COLORS[v.lower()]
    if is_valid_hex_color(v):
        return v.upper()
    raise status.ColorInvalidException(f'Got "{value}".')


EXPENSE_DATA_COLUMNS: List[str] = ['id', 'category', 'amount', 'detail']
SUMMARY_DATA_COLUMNS: List[str] = ['category', 'total', 'transactions', 'weight']

THEMES: List[str] = ['light', 'dark']
CHART_MODES: List[str] = ['expense', 'category']

METADATA_KEYS: List[str] = [
    'name',
    'theme',
    'chart_mode',
    'show_legend',
    'show_tooltip',
]

DEFAULT_SETTINGS: Dict[str, Any] = {
    'metadata': {
        'name': 'Expenses',
        'theme': 'light',
        'chart_mode': 'expense',
        'show_legend': True,
        'show_tooltip': True,
    },
    'categories': [
        {'name': 'Food', 'color': NAMED_COLORS['yellow'], 'emoji': '🍔'},
        {'name': 'Transport', 'color': NAMED_COLORS['blue'], 'emoji': '🚌'},
        {'name': 'Entertainment', 'color': NAMED_COLORS['red'], 'emoji': '🎬'},
        {'name': 'Utilities', 'color': NAMED_COLORS['green'], 'emoji': '💡'},
        {'name': 'Shopping', 'color': '#FFC0CC', 'emoji': '🛍️'},
        {'name': 'Health', 'color': NAMED_COLORS['brown'], 'emoji': '💊'},
    ],
}

SETTINGS_SCHEMA: Dict[str, Any] = {
    'metadata': {
        'type': dict,
        'required': True,
        'required_keys': METADATA_KEYS,
        'item_schema': {
            'name': {'type': str, 'required': True},
            'theme': {'type': str, 'required': True, 'allowed_values': THEMES},
            'chart_mode': {'type': str, 'required': True, 'allowed_values': CHART_MODES},
            'show_legend': {'type': bool, 'required': True},
            'show_tooltip': {'type': bool, 'required': True},
        }
    },
    'categories': {
        'type': list,
        'required': True,
        'item_schema': {
            'name': {'type': str, 'required': True},
            'color': {'type': str, 'required': True, 'format': 'hexcolor'},
            'emoji': {'type': str, 'required': False},
        }
    },
}


def _validate_metadata(metadata_dict: Dict[str, Any], specs: Dict[str, Any]) -> None:
    """Validate the 'metadata' section.

    Args:
        metadata_dict: Mapping of metadata keys to values.
        specs: Schema dict containing 'required_keys' and 'item_schema'.

    Raises:
        TypeError: If metadata_dict is not a dict or a value has the wrong type.
        ValueError: If keys are missing, unknown, or a value is not allowed.
    """
    logging.debug('Validating "metadata" section.')
    if not isinstance(metadata_dict, dict):
        msg: str = '"metadata" must be a dict.'
        logging.error(msg)
        raise TypeError(msg)

    required_keys = set(specs['required_keys'])
    if set(metadata_dict.keys()) != required_keys:
        msg = f'metadata must have keys {required_keys}, got {set(metadata_dict.keys())}.'
        logging.error(msg)
        raise ValueError(msg)

    for key, field_specs in specs['item_schema'].items():
        value = metadata_dict[key]
        if not isinstance(value, field_specs['type']):
            msg = f'Metadata "{key}" must be {field_specs["type"]}, got {type(value)}.'
            logging.error(msg)
            raise TypeError(msg)
        allowed = field_specs.get('allowed_values')
        if allowed and value not in allowed:
            msg = f'Metadata "{key}" must be one of {allowed}, got "{value}".'
            logging.error(msg)
            raise ValueError(msg)


def _validate_categories(categories_list: List[Dict[str, Any]], item_schema: Dict[str, Any]) -> None:
    """Validate the 'categories' section.

    Ensures categories_list is a list of dicts with required fields matching item_schema.

    Args:
        categories_list: Category templates.
        item_schema: Dict describing required fields, types, and format constraints.

    Raises:
        TypeError: If categories_list is not a list or category entries are not dicts or wrong types.
        ValueError: If a required field is missing, fails format validation, or a name is repeated.
    """
    logging.debug('Validating "categories" section.')
    if not isinstance(categories_list, list):
        msg: str = '"categories" must be a list.'
        logging.error(msg)
        raise TypeError(msg)

    seen = set()
    for idx, cat_info in enumerate(categories_list):
        if not isinstance(cat_info, dict):
            msg = f'Category #{idx} must be a dict.'
            logging.error(msg)
            raise TypeError(msg)
        for field, field_specs in item_schema.items():
            if field_specs['required'] and field not in cat_info:
                msg = f'Category #{idx} missing "{field}".'
                logging.error(msg)
                raise ValueError(msg)
            if field not in cat_info:
                continue
            if not isinstance(cat_info[field], field_specs['type']):
                msg = (
                    f'Category #{idx} field "{field}" must be {field_specs["type"]}, '
                    f'got {type(cat_info[field])}.'
                )
                logging.error(msg)
                raise TypeError(msg)
            if field_specs.get('format') == 'hexcolor' and not is_valid_hex_color(cat_info[field]):
                msg = (
                    f'Category #{idx} field "{field}" must be a valid '
                    f'hex color (#RRGGBB), got "{cat_info[field]}".'
                )
                logging.error(msg)
                raise ValueError(msg)

        name = cat_info['name'].strip().lower()
        if not name or name in seen:
            msg = f'Category #{idx} has an empty or duplicate name "{cat_info["name"]}".'
            logging.error(msg)
            raise ValueError(msg)
        seen.add(name)


class SettingsAPI:
    """
    Provides an interface to get/set/revert the in-memory settings sections.
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None) -> None:
        """Initialize SettingsAPI from the defaults, or from `data` when given.

        Args:
            data: Optional settings mapping to start from instead of DEFAULT_SETTINGS.

        Raises:
            SettingsInvalidException: If `data` fails validation.
        """
        self._signals_blocked: bool = False

        self.data: Dict[str, Any] = {}
        for k in SETTINGS_SCHEMA.keys():
            self.data[k] = {}

        self.init_data(data)

    def __getitem__(self, key: str) -> Any:
        """Retrieve a metadata value using dictionary-style access.

        Args:
            key: Metadata key to retrieve.

        Returns:
            Value stored for the metadata key.

        Raises:
            KeyError: If key is not in METADATA_KEYS.
        """
        if key not in METADATA_KEYS:
            raise KeyError(f'Invalid metadata key: {key}, must be one of {METADATA_KEYS}')
        return self.data['metadata'].get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        """Assign a metadata value using dictionary-style access.

        Args:
            key: Metadata key to set.
            value: Value to assign to the metadata key.

        Raises:
            KeyError: If key is not in METADATA_KEYS.
            SettingsInvalidException: If the value cannot be converted or is not allowed.
        """
        if key not in METADATA_KEYS:
            raise KeyError(f'Invalid metadata key: {key}, must be one of {METADATA_KEYS}')

        specs = SETTINGS_SCHEMA['metadata']['item_schema'][key]
        _type = specs['type']

        if not isinstance(value, _type):
            logging.warning(f'Metadata key "{key}" is not of type {_type}, got {type(value)}.')

            # Try to convert to the expected type
            if _type == str:
                value = str(value)
            elif _type == bool:
                value = bool(value)

        allowed = specs.get('allowed_values')
        if allowed and value not in allowed:
            raise status.SettingsInvalidException(f'"{key}" must be one of {allowed}, got "{value}".')

        if self.data['metadata'].get(key) == value:
            return

        self.data['metadata'][key] = value
        logging.debug(f'Metadata "{key}" set to {value!r}')

        if self._signals_blocked:
            return

        from ..ui.actions import signals
        signals.metadataChanged.emit(key, value)

    def block_signals(self, v: bool) -> None:
        """Enable or disable emission of change signals.

        Args:
            v: True to block signals, False to unblock.
        """
        self._signals_blocked = v

    def init_data(self, data: Optional[Dict[str, Any]] = None) -> None:
        """Load `data`, or the defaults, after validating it.

        Raises:
            SettingsInvalidException: If the data fails validation.
        """
        data = copy.deepcopy(data if data is not None else DEFAULT_SETTINGS)
        try:
            self.validate_data(data)
        except (TypeError, ValueError) as ex:
            raise status.SettingsInvalidException(str(ex)) from ex
        self.data = data

    def validate_data(self, data: Optional[Dict[str, Any]] = None) -> None:
        """Validate the full settings structure against SETTINGS_SCHEMA.

        Args:
            data: Settings to validate. Defaults to the current data.

        Raises:
            TypeError: If a section has the wrong type.
            ValueError: If a section is missing or malformed.
        """
        data = self.data if data is None else data
        if not isinstance(data, dict):
            raise TypeError('Settings must be a dict.')

        for section, specs in SETTINGS_SCHEMA.items():
            if specs['required'] and section not in data:
                msg = f'Missing required section "{section}".'
                logging.error(msg)
                raise ValueError(msg)
            self._validate_section(section, data[section])

    @staticmethod
    def _validate_section(section_name: str, section_data: Any) -> None:
        if section_name == 'metadata':
            _validate_metadata(section_data, SETTINGS_SCHEMA['metadata'])
        elif section_name == 'categories':
            _validate_categories(section_data, SETTINGS_SCHEMA['categories']['item_schema'])
        else:
            raise ValueError(f'Unknown section "{section_name}".')

    def get_section(self, section_name: str) -> Any:
        """Return a deep copy of a settings section.

        Raises:
            ValueError: If section_name is not a known section.
        """
        if section_name not in SETTINGS_SCHEMA:
            raise ValueError(f'Unknown section "{section_name}", must be one of {list(SETTINGS_SCHEMA)}')
        return copy.deepcopy(self.data.get(section_name))

    def set_section(self, section_name: str, new_data: Any) -> None:
        """Validate and replace a settings section.

        Args:
            section_name: Section key.
            new_data: New contents of the section.

        Raises:
            ValueError: If section_name is not a known section.
            SettingsInvalidException: If new_data fails validation.
        """
        if section_name not in SETTINGS_SCHEMA:
            raise ValueError(f'Unknown section "{section_name}", must be one of {list(SETTINGS_SCHEMA)}')

        try:
            self._validate_section(section_name, new_data)
        except (TypeError, ValueError) as ex:
            raise status.SettingsInvalidException(str(ex)) from ex

        self.data[section_name] = copy.deepcopy(new_data)
        logging.debug(f'Section "{section_name}" updated.')

        if self._signals_blocked:
            return

        from ..ui.actions import signals
        signals.configSectionChanged.emit(section_name)

    def revert_section(self, section_name: str) -> None:
        """Restore a section to its default value.

        Raises:
            ValueError: If section_name is not a known section.
        """
        logging.debug(f'Reverting section "{section_name}" to defaults.')
        self.set_section(section_name, DEFAULT_SETTINGS.get(section_name))


settings = SettingsAPI()
