from timelock_harness.cli import main

raise SystemExit(main())
