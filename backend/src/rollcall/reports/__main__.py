from rollcall.reports.runner import app

app()
