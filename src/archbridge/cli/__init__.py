"""Command-line interface for ArchBridge."""

from __future__ import annotations

import asyncio as asyncio
import logging as logging

from archbridge.cli.app import main as main
from archbridge.cli.commands import hierarchy as hierarchy_command
from archbridge.cli.commands import sync as sync_command
from archbridge.cli.parser import build_parser as build_parser
from archbridge.config import load_config as load_config
from archbridge.sdk import ArchBridge as ArchBridge

_format_summary = sync_command.format_sync_summary
_run_hierarchy = hierarchy_command.run_hierarchy
_run_sync = sync_command.run_sync
