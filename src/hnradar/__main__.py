from hnradar.main import app

app()
