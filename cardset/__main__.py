from cardset.main import main

raise SystemExit(main())
