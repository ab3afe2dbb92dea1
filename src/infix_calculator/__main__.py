import sys

from infix_calculator.main import main

sys.exit(main())
