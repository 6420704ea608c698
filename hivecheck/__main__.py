from hivecheck.cli import main

raise SystemExit(main())
