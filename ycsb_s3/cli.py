#!/usr/bin/env python3
"""
Command line access to the S3 adapter

Issues single operations through the same code path the workload driver
uses, which is handy for checking credentials and inspecting stored
payloads.

    ycsb-s3 -P s3.yaml -p s3.region=eu-west-1 insert usertable user1 -f field0=abcd
    ycsb-s3 -P s3.yaml scan usertable user1 --limit 10
"""

import logging
import sys
from typing import Any, Dict, Tuple

import click

from ycsb_s3.client import S3Client
from ycsb_s3.config import S3Config, load_properties_file, parse_property
from ycsb_s3.db import Status
from ycsb_s3.errors import ConfigError


def _load_properties(config_file: str, overrides: Tuple[str, ...]) -> Dict[str, Any]:
    properties: Dict[str, Any] = {}
    try:
        if config_file:
            properties.update(load_properties_file(config_file))
        for text in overrides:
            properties.update(parse_property(text))
    except ConfigError as e:
        raise click.UsageError(str(e))
    return properties


def _parse_fields(fields: Tuple[str, ...]) -> Dict[str, bytes]:
    values = {}
    for text in fields:
        name, sep, value = text.partition("=")
        if not sep or not name:
            raise click.BadParameter(
                f"expected field=value, got {text!r}", param_hint="--field"
            )
        values[name] = value.encode()
    return values


def _show_record(record: Dict[str, bytes]) -> None:
    for name, payload in record.items():
        text = payload.decode("utf-8", "replace")
        click.echo(f"{name} ({len(payload)} bytes): {text}")


def _finish(status: Status) -> None:
    click.echo(status.name)
    sys.exit(int(status))


field_option = click.option(
    "--field",
    "-f",
    "fields",
    multiple=True,
    required=True,
    help="Field as field=value (can specify multiple)",
)


@click.group()
@click.option(
    "--config",
    "-P",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML file of s3.* properties",
)
@click.option(
    "--property",
    "-p",
    "overrides",
    multiple=True,
    help="Property override as name=value (can specify multiple)",
)
@click.option("--verbose", "-v", is_flag=True, help="Log connection and errors")
@click.pass_context
def main(ctx, config_file, overrides, verbose):
    """Run single operations against an S3 bucket"""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = _load_properties(config_file, overrides)


def _adapter(ctx) -> S3Client:
    adapter = S3Client(ctx.obj)
    try:
        adapter.init()
    except ConfigError as e:
        raise click.UsageError(str(e))
    return adapter


@main.command("show-config")
@click.pass_context
def show_config(ctx):
    """Print the resolved connection settings"""
    try:
        config = S3Config.from_properties(ctx.obj)
    except ConfigError as e:
        raise click.UsageError(str(e))
    for name, value in config.to_dict().items():
        click.echo(f"{name}: {value}")
    click.echo(f"endpoint_url: {config.endpoint_url}")


@main.command()
@click.argument("bucket")
@click.argument("key")
@field_option
@click.pass_context
def insert(ctx, bucket, key, fields):
    """Insert a record"""
    _finish(_adapter(ctx).insert(bucket, key, _parse_fields(fields)))


@main.command()
@click.argument("bucket")
@click.argument("key")
@field_option
@click.pass_context
def update(ctx, bucket, key, fields):
    """Update an existing record"""
    _finish(_adapter(ctx).update(bucket, key, _parse_fields(fields)))


@main.command()
@click.argument("bucket")
@click.argument("key")
@click.pass_context
def read(ctx, bucket, key):
    """Read a record"""
    result: Dict[str, bytes] = {}
    status = _adapter(ctx).read(bucket, key, None, result)
    _show_record(result)
    _finish(status)


@main.command()
@click.argument("bucket")
@click.argument("key")
@click.pass_context
def delete(ctx, bucket, key):
    """Delete a record"""
    _finish(_adapter(ctx).delete(bucket, key))


@main.command()
@click.argument("bucket")
@click.argument("start_key")
@click.option("--limit", "-n", type=int, default=10, help="Maximum records to read")
@click.pass_context
def scan(ctx, bucket, start_key, limit):
    """Read records in key order starting at START_KEY"""
    results = []
    status = _adapter(ctx).scan(bucket, start_key, limit, None, results)
    for record in results:
        _show_record(record)
    _finish(status)


if __name__ == "__main__":
    main()
