#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import sys
import os
# Add src to path for imports (needed when running test file directly)
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

import unittest

from channel import ChannelKind
from config import ChannelFilter, Settings
from errors import ConfigError


class TestChannelFilter(unittest.TestCase):
    def test_from_flags(self):
        f = ChannelFilter.from_flags(text=True, voice=False)
        self.assertTrue(f.matches(ChannelKind.TEXT))
        self.assertFalse(f.matches(ChannelKind.VOICE))

    def test_all_matches_everything(self):
        f = ChannelFilter.from_flags(all_kinds=True)
        for kind in ChannelKind:
            self.assertTrue(f.matches(kind))

    def test_none(self):
        self.assertTrue(ChannelFilter.from_flags(text=False).none())
        self.assertFalse(ChannelFilter.from_flags(news=True).none())
        self.assertFalse(ChannelFilter(all_kinds=True).none())

    def test_unknown_flag(self):
        with self.assertRaises(ValueError):
            ChannelFilter.from_flags(thread=True)

    def test_union(self):
        f = ChannelFilter([ChannelKind.TEXT]).union(ChannelFilter([ChannelKind.STAGE]))
        self.assertEqual(f.kinds, {ChannelKind.TEXT, ChannelKind.STAGE})

    def test_describe(self):
        self.assertEqual(ChannelFilter([ChannelKind.VOICE, ChannelKind.TEXT]).describe(), "text, voice")
        self.assertEqual(ChannelFilter(all_kinds=True).describe(), "all")


class TestSettings(unittest.TestCase):
    def setUp(self):
        self.text_only = ChannelFilter([ChannelKind.TEXT])

    def test_valid(self):
        settings = Settings.from_options(" token ", 123, self.text_only, assume_yes=True)
        self.assertEqual(settings.token, "token")
        self.assertEqual(settings.guild_id, 123)
        self.assertTrue(settings.assume_yes)

    def test_token_not_in_repr(self):
        settings = Settings.from_options("very-secret", 123, self.text_only)
        self.assertNotIn("very-secret", repr(settings))

    def test_missing_token(self):
        with self.assertRaises(ConfigError) as cm:
            Settings.from_options(None, 123, self.text_only)
        self.assertIn("DISCORD_TOKEN", str(cm.exception))

    def test_missing_guild(self):
        with self.assertRaises(ConfigError) as cm:
            Settings.from_options("token", None, self.text_only)
        self.assertIn("GUILD_ID", str(cm.exception))

    def test_missing_both_reported_together(self):
        with self.assertRaises(ConfigError) as cm:
            Settings.from_options("", None, self.text_only)
        self.assertIn("token", str(cm.exception))
        self.assertIn("guild", str(cm.exception))

    def test_empty_filter(self):
        with self.assertRaises(ConfigError) as cm:
            Settings.from_options("token", 123, ChannelFilter())
        self.assertIn("--all", str(cm.exception))

    def test_worker_range(self):
        with self.assertRaises(ConfigError):
            Settings.from_options("token", 123, self.text_only, workers=0)


if __name__ == '__main__':
    unittest.main()
