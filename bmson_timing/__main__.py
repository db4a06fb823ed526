"""Package entry point for ``python -m bmson_timing``.

WHY: Users run the normalizer as ``python -m bmson_timing chart.bmson``.
Python's ``-m`` flag looks for ``__main__.py`` inside the package and
executes it.

HOW: Checks sys.argv for the ``--serve`` flag. If present, starts the
HTTP API under uvicorn. Otherwise, delegates to the CLI's main() function.
"""

import sys

if __name__ == "__main__":
    if "--serve" in sys.argv:
        from bmson_timing.server.app import run_api
        run_api()
    else:
        from bmson_timing.cli import main
        main()
