import sys

from deploy_waiter.main import main

sys.exit(main())
