import sys

from langchat.main import main

sys.exit(main())
