import sys

from issuetracker.main import main

sys.exit(main())
