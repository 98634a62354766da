import sys

from ts_oas_generator.cli import main

sys.exit(main())
