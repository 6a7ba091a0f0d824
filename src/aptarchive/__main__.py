from aptarchive.cli import main

raise SystemExit(main())
