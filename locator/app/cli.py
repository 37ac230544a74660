"""Command line entry point for the visitor locator.

Examples::

    python -m locator.app.cli serve --port 8000
    python -m locator.app.cli capture --lat -23.5505 --lon -46.6333
    python -m locator.app.cli list --username admin --password ...
"""

import argparse
import asyncio
import sys

import common.log
import common.settings

from .capture import backends, display
from .capture.auth import AdminGate, AdminRequired
from .capture.client import CaptureClient, CaptureState
from .capture.geocoding import ReverseGeocoder
from .capture.positioning import (
    DeniedPositioner,
    FixedPositioner,
    Positioner,
    UnsupportedPositioner,
)

_ADMIN_COMMANDS = ('list', 'clear', 'generate')


def _parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description='Visitor location capture')
    parser.add_argument(
        '--backend',
        choices=backends.BACKEND_KINDS,
        default=None,
        help='Where records are stored (default: STORE_BACKEND)',
    )
    parser.add_argument('--server-url', default=None, help='Location store URL')
    sub = parser.add_subparsers(dest='command', required=True)

    serve = sub.add_parser('serve', help='Run the location store server')
    serve.add_argument('--host', default='0.0.0.0')
    serve.add_argument('--port', type=int, default=8000)

    capture = sub.add_parser('capture', help='Capture and save one location')
    capture.add_argument('--lat', type=float, default=None, help='Latitude')
    capture.add_argument('--lon', type=float, default=None, help='Longitude')
    capture.add_argument(
        '--denied',
        action='store_true',
        help='Behave as if the visitor refused location access',
    )
    capture.add_argument('--device-info', default=None)

    for name, help_text in (
        ('list', 'Show saved locations'),
        ('clear', 'Delete all saved locations'),
        ('generate', 'Save the sample location'),
    ):
        admin = sub.add_parser(name, help=help_text)
        admin.add_argument('--username', default=common.settings.ADMIN_USERNAME)
        admin.add_argument('--password', default=common.settings.ADMIN_PASSWORD)

    args = parser.parse_args(argv)
    if args.command == 'capture' and (args.lat is None) != (args.lon is None):
        parser.error('--lat and --lon must be given together')
    return args


def _make_positioner(args: argparse.Namespace) -> Positioner:
    if getattr(args, 'denied', False):
        return DeniedPositioner()
    if getattr(args, 'lat', None) is None:
        return UnsupportedPositioner()
    return FixedPositioner(args.lat, args.lon)


def build_client(args: argparse.Namespace) -> CaptureClient:
    """Assemble a CaptureClient from parsed arguments and settings."""
    return CaptureClient(
        positioner=_make_positioner(args),
        geocoder=ReverseGeocoder(),
        backend=backends.make_backend(args.backend, base_url=args.server_url),
        gate=AdminGate(),
        device_info=getattr(args, 'device_info', None),
    )


def _print(lines: list[str]) -> None:
    for line in lines:
        print(line)


async def run_command(client: CaptureClient, args: argparse.Namespace) -> int:
    """Run a client command and return the process exit code."""
    if args.command == 'capture':
        result = await client.capture()
        _print(display.describe_result(result))
        return 0 if result.state is CaptureState.SUCCEEDED else 1

    if args.command in _ADMIN_COMMANDS:
        if not client.login(args.username or '', args.password or ''):
            print('Credenciais inválidas', file=sys.stderr)
            return 1
    try:
        if args.command == 'list':
            _print(display.describe_history(await client.refresh()))
            return 0
        if args.command == 'clear':
            ok = await client.clear()
            print(
                'Localizações limpas com sucesso!'
                if ok
                else 'Erro ao limpar as localizações.'
            )
            return 0 if ok else 1
        if args.command == 'generate':
            ok = await client.generate()
            print(
                'Localização gerada e salva no banco de dados!'
                if ok
                else 'Erro ao salvar a localização.'
            )
            return 0 if ok else 1
    except AdminRequired:
        print('Credenciais inválidas', file=sys.stderr)
        return 1
    raise ValueError(f'Unknown command {args.command!r}')


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    common.log.configure_logging()
    if args.command == 'serve':
        import uvicorn

        uvicorn.run('locator.app.main:app', host=args.host, port=args.port)
        return 0
    return asyncio.run(run_command(build_client(args), args))


if __name__ == '__main__':
    sys.exit(main())
