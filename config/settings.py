import os
from dotenv import load_dotenv

load_dotenv()

# Importer configuration
CSV_PATH = os.environ.get("CSV_PATH", "./connections.csv")
COMPANIES_CSV_PATH = os.environ.get("COMPANIES_CSV_PATH", "./companies.csv")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
