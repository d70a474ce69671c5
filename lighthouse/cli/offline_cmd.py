"""Offline queue commands: enqueue, status, queue, sync, retry, sweep, clear, watch."""
import json
import logging
import sys
import time

import click

from lighthouse.config.settings import OutboxConfig
from lighthouse.offline import (
    ActionStatus,
    AlwaysOnline,
    ManualConnectivity,
    SocketConnectivity,
    StorageError,
    build_offline_queue,
    is_reachable,
)
from lighthouse.offline.notify import summary_message

from .output import (
    error_box,
    print_error,
    print_json,
    print_success,
    print_warning,
    success_box,
    table,
)


class EchoNotifier:
    """Prints the pass summary to the terminal."""

    def summarize(self, success_count: int, failure_count: int) -> None:
        message, level = summary_message(success_count, failure_count)
        if level == "success":
            print_success(message)
        else:
            print_warning(message)


def _load_config() -> OutboxConfig:
    try:
        config = OutboxConfig.from_env()
    except ValueError as e:
        error_box("Config: INVALID", str(e), "check LIGHTHOUSE_* environment variables")
        sys.exit(2)
    errors = config.validate()
    if errors:
        error_box("Config: INVALID", "; ".join(errors), "check LIGHTHOUSE_* environment variables")
        sys.exit(2)
    return config


def _open_queue(config: OutboxConfig, connectivity=None):
    """Build a queue; probes the API host unless connectivity is given."""
    if connectivity is None:
        connectivity = SocketConnectivity(
            host=config.probe_host,
            port=config.probe_port,
            timeout=config.probe_timeout_s,
            probe=is_reachable,
        )
    return build_offline_queue(config, connectivity=connectivity, notifier=EchoNotifier())


def _parse_headers(raw: tuple[str, ...]) -> dict[str, str]:
    headers = {}
    for item in raw:
        name, sep, value = item.partition(":")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected 'Name: value', got '{item}'", param_hint="--header")
        headers[name.strip()] = value.strip()
    return headers


@click.group()
def offline():
    """Offline queue commands."""
    pass


@offline.command()
@click.argument('method')
@click.argument('url')
@click.option('--header', '-H', 'raw_headers', multiple=True, help='Extra header as "Name: value"')
@click.option('--body', default=None, help='JSON request body')
def enqueue(method: str, url: str, raw_headers: tuple[str, ...], body: str | None):
    """Queue a write for delivery (sent immediately if the API is reachable)."""
    headers = _parse_headers(raw_headers)
    try:
        payload = json.loads(body) if body is not None else None
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"invalid JSON: {e}", param_hint="--body")

    config = _load_config()
    try:
        queue = _open_queue(config)
        action = queue.enqueue(method, url, headers=headers, body=payload)
        current = queue.store.get(action.id) or action

        success_box("Offline Enqueue: QUEUED", [
            ("Id", action.id),
            ("Request", f"{action.method} {action.url}"),
            ("Status", current.status.value),
            ("Queue", str(queue.status().total)),
        ], "lighthouse offline status")
        sys.exit(0)

    except ValueError as e:
        error_box("Offline Enqueue: REJECTED", str(e))
        sys.exit(2)
    except StorageError as e:
        error_box("Offline Enqueue: FAILED", str(e), "check LIGHTHOUSE_QUEUE_PATH")
        sys.exit(2)


@offline.command()
def status():
    """Show queue counts and connectivity."""
    config = _load_config()
    try:
        queue = _open_queue(config, connectivity=ManualConnectivity(online=False))
        counts = queue.status().to_dict()
        counts["connected"] = is_reachable(config.probe_host, config.probe_port, config.probe_timeout_s)
        print_json(counts)
    except StorageError as e:
        print_error(f"Status check failed: {e}")
        sys.exit(2)


@offline.command('queue')
@click.option('--status', 'status_filter', type=click.Choice([s.value for s in ActionStatus]),
              default=None, help='Only show actions with this status')
@click.option('--limit', '-n', default=10, help='Number of actions to show')
def show_queue(status_filter: str | None, limit: int):
    """List queued actions, oldest first."""
    config = _load_config()
    try:
        queue = _open_queue(config, connectivity=ManualConnectivity(online=False))
        actions = queue.actions(status_filter)

        if not actions:
            click.echo("Queue is empty")
            return

        shown = actions[:limit]
        click.echo(f"Showing {len(shown)} of {len(actions)} actions:\n")
        table(
            ["id", "request", "status", "retries", "created", "error"],
            [[a.id[:8], f"{a.method} {a.url}", a.status.value, str(a.retry_count),
              a.timestamp, a.error or ""] for a in shown],
        )

    except StorageError as e:
        print_error(f"Queue list failed: {e}")
        sys.exit(2)


@offline.command('sync')
@click.option('--force', is_flag=True, help='Attempt sync even if the API probe fails')
def do_sync(force: bool):
    """Run one sync pass."""
    config = _load_config()
    queue = _open_queue(config, connectivity=AlwaysOnline() if force else None)

    result = queue.trigger()

    if result.error:
        print_error(f"Sync failed: {result.error}")
        print_json(result.to_dict())
        sys.exit(2)

    if not result.ran:
        if result.reason == "offline":
            print_error("Not connected. Use --force to attempt anyway.")
        else:
            print_error(f"Sync skipped: {result.reason}")
        print_json(result.to_dict())
        sys.exit(1)

    print_json(result.to_dict())


@offline.command()
def retry():
    """Reset failed actions to pending and sync."""
    config = _load_config()
    try:
        queue = _open_queue(config)
        reset = queue.retry_failed()
        print_success(f"Reset {reset} failed actions")
        if queue.last_result is not None:
            print_json(queue.last_result.to_dict())
    except StorageError as e:
        print_error(f"Retry failed: {e}")
        sys.exit(2)


@offline.command()
def sweep():
    """Purge synced actions past the retention window."""
    config = _load_config()
    try:
        queue = _open_queue(config, connectivity=ManualConnectivity(online=False))
        removed = queue.sweep()
        print_json({"removed_count": removed, "retention_days": config.retention_days})
    except StorageError as e:
        print_error(f"Sweep failed: {e}")
        sys.exit(2)


@offline.command()
@click.option('--yes', is_flag=True, help='Do not ask for confirmation')
def clear(yes: bool):
    """Delete every queued action, delivered or not."""
    config = _load_config()
    try:
        queue = _open_queue(config, connectivity=ManualConnectivity(online=False))
        size = queue.status().total
        if size == 0:
            click.echo("Queue already empty")
            return

        if yes or click.confirm(f"Clear {size} queued actions?"):
            removed = queue.clear()
            print_success(f"Queue cleared ({removed} actions)")

    except StorageError as e:
        print_error(f"Clear failed: {e}")
        sys.exit(2)


@offline.command()
@click.option('--interval', type=float, default=None, help='Seconds between probes')
@click.option('--max-polls', type=int, default=0, help='Stop after N probes (0 = run forever)')
def watch(interval: float | None, max_polls: int):
    """Probe the API and sync whenever it comes back online."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    logger = logging.getLogger("lighthouse.offline")

    config = _load_config()
    interval = interval if interval is not None else config.poll_interval_s
    connectivity = SocketConnectivity(
        host=config.probe_host,
        port=config.probe_port,
        timeout=config.probe_timeout_s,
        probe=is_reachable,
    )
    queue = _open_queue(config, connectivity=connectivity)
    logger.info(f"Watching {config.probe_host}:{config.probe_port} every {interval}s")

    polls = 0
    try:
        while True:
            was_online = connectivity.is_online()
            online = connectivity.poll()
            if online and not was_online:
                logger.info("Back online, queue synced by transition")
            elif online and queue.status().pending > 0:
                queue.trigger()

            removed = queue.sweep()
            if removed:
                logger.info(f"Swept {removed} expired actions")

            polls += 1
            if max_polls and polls >= max_polls:
                break
            time.sleep(interval)
    except StorageError as e:
        logger.exception(f"Queue storage failed: {e}")
        sys.exit(2)
    except KeyboardInterrupt:
        logger.info("Watch stopped")
