import sys

from docdiff.cli import main

sys.exit(main())
