import sys

from wppg.cli import main

sys.exit(main())
