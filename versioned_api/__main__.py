import sys

from versioned_api.server import main

sys.exit(main())
