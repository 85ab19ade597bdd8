from dicetable.main import main

raise SystemExit(main())
