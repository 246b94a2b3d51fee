"""Channel server entrypoint.

    python3 channel.py --setup          # write data/config/server_config.yml
    python3 channel.py --port 8000      # serve the API with uvicorn
"""
import sys
from typing import Iterable, Optional

from channel_lib.setup import get_loaded_config, get_parser, parse_args, setup


def main(argv: Optional[Iterable[str]] = None) -> int:
    argv = list(argv) if argv is not None else sys.argv[1:]
    args = parse_args(argv)
    if args.help:
        get_parser().print_help()
        return 0
    rc = setup(argv)
    if rc != 0 or args.print_template:
        return rc

    import uvicorn
    from channel_lib.main import create_app, Config

    app = create_app(Config(config_path=args.config, server_config=get_loaded_config()))
    uvicorn.run(app, host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
