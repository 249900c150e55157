from es256_jwt.cli import main

raise SystemExit(main())
