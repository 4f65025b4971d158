import datetime
import functools
import pathlib
import click
import zirconium as zr
from autoinject import injector
from bunnyfs.boot import init_bunnyfs
from bunnyfs.exc import BunnyFSError
from bunnyfs.storage import StorageController, BaseAdapter


@injector.inject
def _get_adapter(target: str = None, controller: StorageController = None, config: zr.ApplicationConfig = None) -> BaseAdapter:
    target = target or config.as_str(("bunnyfs", "default_target"), default=None)
    if not target:
        raise click.UsageError("No --target given and bunnyfs.default_target is not configured")
    return controller.get_adapter(target)


def _adapter_command(cb):
    """Pass the adapter for the selected target and report bunnyfs errors as click errors."""

    @functools.wraps(cb)
    @click.pass_obj
    def _inner(target, *args, **kwargs):
        try:
            return cb(_get_adapter(target), *args, **kwargs)
        except BunnyFSError as ex:
            raise click.ClickException(f"{ex.__class__.__name__}: {str(ex)}") from ex

    return _inner


def _check(result: bool, message: str):
    if not result:
        raise click.ClickException(message)
    print("OK")


def _format_timestamp(ts) -> str:
    if ts is None:
        return "-"
    return datetime.datetime.fromtimestamp(ts, datetime.timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


@click.group
@click.option("--target", "-t", default=None, help="bunnycdn://ZONE_NAME or a local directory")
@click.pass_context
def main(ctx, target):
    ctx.obj = target


@main.command
@click.argument("directory", default="")
@click.option("--recursive", "-r", is_flag=True, default=False)
@_adapter_command
def ls(adapter: BaseAdapter, directory, recursive):
    for entry in adapter.list_contents(directory, recursive):
        print(f"{entry['type']: <4} {entry['size']: >12} {_format_timestamp(entry['timestamp'])} {entry['path']}")


@main.command
@click.argument("path")
@_adapter_command
def cat(adapter: BaseAdapter, path):
    content = adapter.read(path)
    if content is None:
        raise click.ClickException(f"Could not read [{path}]")
    click.echo(content, nl=False)


@main.command
@click.argument("path")
@_adapter_command
def stat(adapter: BaseAdapter, path):
    metadata = adapter.get_metadata(path)
    if metadata is None:
        raise click.ClickException(f"Not found: [{path}]")
    ml = max(len(k) for k in metadata.keys()) + 2
    fstr = "{: <" + str(ml) + "}: {}"
    for key in metadata:
        print(fstr.format(key, metadata[key]))


@main.command
@click.argument("path")
@click.argument("local_file")
@click.option("--overwrite", is_flag=True, default=False)
@_adapter_command
def get(adapter: BaseAdapter, path, local_file, overwrite):
    local_path = pathlib.Path(local_file)
    if local_path.exists() and not overwrite:
        raise click.ClickException(f"Path [{local_path}] already exists, use --overwrite")
    content = adapter.read(path)
    if content is None:
        raise click.ClickException(f"Could not read [{path}]")
    local_path.write_bytes(content)
    print(f"Downloaded {len(content)} bytes")


@main.command
@click.argument("local_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("path")
@_adapter_command
def put(adapter: BaseAdapter, local_file, path):
    _check(adapter.write(path, pathlib.Path(local_file).read_bytes()), f"Could not write [{path}]")


@main.command
@click.argument("path")
@_adapter_command
def rm(adapter: BaseAdapter, path):
    _check(adapter.delete(path), f"Could not delete [{path}]")


@main.command
@click.argument("directory")
@_adapter_command
def mkdir(adapter: BaseAdapter, directory):
    _check(adapter.create_dir(directory), f"Could not create directory [{directory}]")


@main.command
@click.argument("directory")
@_adapter_command
def rmdir(adapter: BaseAdapter, directory):
    _check(adapter.delete_dir(directory), f"Could not delete directory [{directory}]")


@main.command
@click.argument("source")
@click.argument("destination")
@_adapter_command
def mv(adapter: BaseAdapter, source, destination):
    _check(adapter.rename(source, destination), f"Could not move [{source}] to [{destination}]")


@main.command
@click.argument("source")
@click.argument("destination")
@_adapter_command
def cp(adapter: BaseAdapter, source, destination):
    _check(adapter.copy(source, destination), f"Could not copy [{source}] to [{destination}]")


def run():
    init_bunnyfs("cli")
    main()
