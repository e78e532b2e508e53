"""
Tests for ExpensePie.settings.lib.

Run:
    python -m unittest tests.test_settings
"""
import copy
import unittest

from ExpensePie.settings import lib
from ExpensePie.status import status
from ExpensePie.ui.actions import signals
from tests.base import BaseTestCase, signal_spy


class ColorTests(BaseTestCase):

    def test_is_valid_hex_color(self):
        self.assertTrue(lib.is_valid_hex_color('#FF00aa'))
        self.assertFalse(lib.is_valid_hex_color('FF00AA'))
        self.assertFalse(lib.is_valid_hex_color('#FFF'))
        self.assertFalse(lib.is_valid_hex_color('#GG0000'))

    def test_resolve_named_color(self):
        self.assertEqual(lib.resolve_color('red'), lib.NAMED_COLORS['red'])
        self.assertEqual(lib.resolve_color(' Blue '), lib.NAMED_COLORS['blue'])

    def test_resolve_hex_color(self):
        self.assertEqual(lib.resolve_color('#abcdef'), '#ABCDEF')

    def test_resolve_invalid_color(self):
        for bad in ('', 'magenta-ish', '#12345', None, 0xFF0000):
            with self.assertRaises(status.ColorInvalidException, msg=repr(bad)):
                lib.resolve_color(bad)

    def test_named_colors_are_hex(self):
        for value in lib.NAMED_COLORS.values():
            self.assertTrue(lib.is_valid_hex_color(value))


class SettingsAPITests(BaseTestCase):

    def test_defaults(self):
        self.assertEqual(lib.settings['theme'], 'light')
        self.assertEqual(lib.settings['chart_mode'], 'expense')
        self.assertTrue(lib.settings['show_legend'])
        self.assertEqual(lib.settings.get_section('categories'), lib.DEFAULT_SETTINGS['categories'])

    def test_default_settings_validate(self):
        lib.settings.validate_data(copy.deepcopy(lib.DEFAULT_SETTINGS))

    def test_unknown_key(self):
        with self.assertRaises(KeyError):
            _ = lib.settings['currency']
        with self.assertRaises(KeyError):
            lib.settings['currency'] = 'EUR'

    def test_set_metadata_emits(self):
        with signal_spy(signals.metadataChanged) as emitted:
            lib.settings['chart_mode'] = 'category'
        self.assertEqual(lib.settings['chart_mode'], 'category')
        self.assertEqual(emitted, [('chart_mode', 'category')])

    def test_set_same_value_does_not_emit(self):
        with signal_spy(signals.metadataChanged) as emitted:
            lib.settings['chart_mode'] = 'expense'
        self.assertEqual(emitted, [])

    def test_set_metadata_coerces_type(self):
        lib.settings['show_legend'] = 0
        self.assertIs(lib.settings['show_legend'], False)
        lib.settings['name'] = 42
        self.assertEqual(lib.settings['name'], '42')

    def test_set_metadata_rejects_disallowed_value(self):
        with self.assertRaises(status.SettingsInvalidException):
            lib.settings['theme'] = 'sepia'
        self.assertEqual(lib.settings['theme'], 'light')

    def test_block_signals(self):
        lib.settings.block_signals(True)
        try:
            with signal_spy(signals.metadataChanged) as emitted:
                lib.settings['show_tooltip'] = False
        finally:
            lib.settings.block_signals(False)
        self.assertEqual(emitted, [])
        self.assertFalse(lib.settings['show_tooltip'])

    def test_get_section_returns_copy(self):
        section = lib.settings.get_section('metadata')
        section['theme'] = 'dark'
        self.assertEqual(lib.settings['theme'], 'light')

    def test_get_unknown_section(self):
        with self.assertRaises(ValueError):
            lib.settings.get_section('unknown')

    def test_set_section(self):
        categories = [{'name': 'Rent', 'color': '#112233', 'emoji': '🏠'}]
        with signal_spy(signals.configSectionChanged) as emitted:
            lib.settings.set_section('categories', categories)
        self.assertEqual(lib.settings.get_section('categories'), categories)
        self.assertEqual(emitted, [('categories',)])

    def test_set_section_rejects_invalid_data(self):
        invalid = [
            [{'name': 'Rent'}],
            [{'name': 'Rent', 'color': 'red'}],
            [{'name': 'Rent', 'color': '#112233'}, {'name': 'rent', 'color': '#112233'}],
            [{'name': ' ', 'color': '#112233'}],
            {'name': 'Rent', 'color': '#112233'},
        ]
        for value in invalid:
            with self.assertRaises(status.SettingsInvalidException, msg=repr(value)):
                lib.settings.set_section('categories', value)
        self.assertEqual(lib.settings.get_section('categories'), lib.DEFAULT_SETTINGS['categories'])

    def test_set_metadata_section_requires_all_keys(self):
        metadata = lib.settings.get_section('metadata')
        del metadata['show_tooltip']
        with self.assertRaises(status.SettingsInvalidException):
            lib.settings.set_section('metadata', metadata)

    def test_revert_section(self):
        lib.settings['theme'] = 'dark'
        lib.settings.revert_section('metadata')
        self.assertEqual(lib.settings.get_section('metadata'), lib.DEFAULT_SETTINGS['metadata'])

    def test_init_with_invalid_data(self):
        data = copy.deepcopy(lib.DEFAULT_SETTINGS)
        data['metadata']['chart_mode'] = 'monthly'
        with self.assertRaises(status.SettingsInvalidException):
            lib.SettingsAPI(data)

    def test_init_with_custom_data(self):
        data = copy.deepcopy(lib.DEFAULT_SETTINGS)
        data['categories'] = []
        api = lib.SettingsAPI(data)
        self.assertEqual(api.get_section('categories'), [])


if __name__ == '__main__':
    unittest.main()
