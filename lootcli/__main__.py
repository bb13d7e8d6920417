from lootcli.cli.main import main

raise SystemExit(main())
