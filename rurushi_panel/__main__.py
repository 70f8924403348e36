import sys

from rurushi_panel.main import main

sys.exit(main())
