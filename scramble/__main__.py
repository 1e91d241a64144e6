"""Run the scramble server: ``python -m scramble``."""

import argparse
import logging
import sys

import uvicorn

from .config import ServerSettings
from .errors import DictionaryLoadError
from .main import create_application

LOG_LEVELS = ['debug', 'info', 'warning', 'error', 'critical']

logger = logging.getLogger('scramble')


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog='scramble', description='Multi-round word scramble game server')
    parser.add_argument('-H', '--host', help='address to listen on')
    parser.add_argument('-P', '--port', type=int, help='port to listen on')
    parser.add_argument('--log-level', choices=LOG_LEVELS, help='logging level')
    parser.add_argument('--word-list', dest='word_list_path', help='tab separated WORD<TAB>definition file')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    overrides = {k: v for k, v in vars(args).items() if v is not None}
    settings = ServerSettings(**overrides)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    try:
        application = create_application(settings=settings)
    except DictionaryLoadError as exc:
        logger.critical('Cannot start: %s', exc)
        return 1

    uvicorn.run(application, host=settings.host, port=settings.port, log_level=settings.log_level)
    return 0


if __name__ == '__main__':
    sys.exit(main())
