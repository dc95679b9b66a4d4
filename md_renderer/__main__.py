from md_renderer.cli.app import app

app()
