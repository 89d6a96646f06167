#!/usr/bin/env python3
"""
htmlstruct CLI

Command-line interface for trying selectors and record types against saved
HTML pages. Provides commands for ad-hoc extraction, inspecting the tag index
of a record type and showing the active configuration.
"""

import dataclasses
import importlib
import json
import os
import sys
import logging
from typing import Optional, Tuple

import click
import colorama
from colorama import Fore, Style

from .config import config
from .errors import MappingError
from .mapper import RecordMapper
from .tags import tagged

# Initialize colorama for cross-platform colored output
colorama.init()

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.WARNING),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def print_success(message: str):
    """Print success message in green"""
    click.echo(f"{Fore.GREEN}✓ {message}{Style.RESET_ALL}")


def print_error(message: str):
    """Print error message in red"""
    click.echo(f"{Fore.RED}✗ {message}{Style.RESET_ALL}", err=True)


def print_info(message: str):
    """Print info message in blue"""
    click.echo(f"{Fore.BLUE}ℹ {message}{Style.RESET_ALL}")


def print_json(data, title: Optional[str] = None):
    """Print JSON data"""
    if title:
        print_info(title)
    click.echo(json.dumps(data, indent=2, default=str))


def quote_selector(selector: str) -> str:
    """Escape a selector for use inside a key:"value" tag"""
    return selector.replace('\\', '\\\\').replace('"', '\\"')


def make_record_type(fields: Tuple[str, ...], key: str):
    """Build a dataclass with one str field per NAME=SELECTOR option"""
    spec = []
    for item in fields:
        name, sep, selector = item.partition('=')
        name = name.strip()
        if not sep or not name.isidentifier() or not selector:
            raise click.BadParameter(f"expected NAME=SELECTOR, got {item!r}", param_hint="'--field'")
        spec.append((name, str, tagged(f'{key}:"{quote_selector(selector)}"', default="")))
    return dataclasses.make_dataclass('Record', spec)


def load_record_type(target: str):
    """Import MODULE:CLASS"""
    module_name, sep, class_name = target.partition(':')
    if not sep or not module_name or not class_name:
        raise click.BadParameter(f"expected MODULE:CLASS, got {target!r}", param_hint="'TARGET'")
    # Make modules in the current directory importable from the console script
    if os.getcwd() not in sys.path:
        sys.path.insert(0, os.getcwd())

    module = importlib.import_module(module_name)
    return getattr(module, class_name)


@click.group()
@click.version_option(version='1.0.0')
def cli():
    """
    htmlstruct CLI - declarative HTML record mapping

    Fill structured records from HTML pages using selectors declared in field tags.
    """
    pass


@cli.command()
@click.argument('content', type=click.File('r'))
@click.option('--field', '-f', 'fields', multiple=True, required=True,
              help='Field to extract as NAME=SELECTOR (repeatable)')
@click.option('--many', 'collection', default=None,
              help='Collection selector; extracts one record per match')
@click.option('--key', default=None, type=click.Choice(['xpath', 'css']),
              help='Selector language (uses config default if not specified)')
@click.option('--json', 'output_json', is_flag=True, help='Output results as JSON')
def extract(content, fields: Tuple[str, ...], collection: Optional[str], key: Optional[str], output_json: bool):
    """Extract fields from an HTML file ('-' reads stdin)"""
    key = key or config.TAG_KEY
    record_type = make_record_type(fields, key)
    mapper = RecordMapper(key, collect_report=True)

    try:
        html_text = content.read()
        if collection:
            records = [dataclasses.asdict(r) for r in mapper.build_many_from_text(record_type, html_text, collection)]
        else:
            records = [dataclasses.asdict(mapper.build_one_from_text(record_type, html_text))]
    except MappingError as e:
        print_error(f"Extraction failed: {e}")
        sys.exit(1)

    report = mapper.last_report

    if output_json:
        print_json(records if collection else records[0])
        return

    print_success(f"Extracted {len(records)} record(s), {report.fields_assigned} field value(s)")
    for i, record in enumerate(records, 1):
        if collection:
            click.echo(f"{Fore.CYAN}#{i}{Style.RESET_ALL}")
        for name, value in record.items():
            click.echo(f"  {name}: {value}")


@cli.command()
@click.argument('target')
@click.option('--key', default=None, help='Annotation key (uses config default if not specified)')
@click.option('--json', 'output_json', is_flag=True, help='Output results as JSON')
def tags(target: str, key: Optional[str], output_json: bool):
    """Show the field -> selector index of a record type given as MODULE:CLASS"""
    mapper = RecordMapper(key)

    try:
        record_type = load_record_type(target)
        index = mapper.tag_index(record_type)
    except (ImportError, AttributeError, TypeError, MappingError) as e:
        print_error(f"Cannot read tags of {target}: {e}")
        sys.exit(1)

    if output_json:
        print_json(index)
        return

    print_info(f"{record_type.__name__} fields under '{mapper.key}':")
    for name, selector in index.items():
        marker = " (skipped)" if config.is_skipped(selector) else ""
        click.echo(f"  {name}: {selector}{marker}")


@cli.command()
def config_info():
    """Show current configuration"""
    print_info("htmlstruct Configuration:")
    click.echo(f"Tag Key: {config.TAG_KEY}")
    click.echo(f"Tag Metadata: {config.TAG_METADATA}")
    click.echo(f"Skip Sentinel: {config.SKIP_SENTINEL}")
    click.echo(f"Nested Suffix: {config.NESTED_SUFFIX}")
    click.echo(f"ID Marker: {config.ID_MARKER}")
    click.echo(f"Log Level: {config.LOG_LEVEL}")


if __name__ == '__main__':
    cli()
