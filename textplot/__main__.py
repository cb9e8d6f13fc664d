from textplot.cli import main


raise SystemExit(main())
