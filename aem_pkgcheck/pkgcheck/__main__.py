import sys

from pkgcheck.cli import main

sys.exit(main())
