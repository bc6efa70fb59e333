from scoundrel.cli import main

raise SystemExit(main())
