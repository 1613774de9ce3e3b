import sys

from workload_metrics.main import main

sys.exit(main())
