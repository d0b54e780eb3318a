import sys

from card_query.cli import main


sys.exit(main())
