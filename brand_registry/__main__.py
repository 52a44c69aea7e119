from brand_registry.cli import main

raise SystemExit(main())
