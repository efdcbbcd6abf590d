from bob_config.runtime.lifecycle import main

raise SystemExit(main())
