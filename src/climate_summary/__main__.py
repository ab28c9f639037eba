from climate_summary.main import main_cli

main_cli()
