import sys

from forcegraph.main import main

sys.exit(main())
