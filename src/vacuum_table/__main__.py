"""Run the backup CLI: python -m vacuum_table CONFIG OUTPUT DOWNLOAD_DIR."""

import sys

from vacuum_table.cli import main

if __name__ == "__main__":
    sys.exit(main())
