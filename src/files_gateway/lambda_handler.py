"""Serverless handler for the files gateway using Mangum."""
from mangum import Mangum

from files_gateway.main import create_app

# Create FastAPI app; settings come from the function's environment
app = create_app()

# Wrap with Mangum for Lambda compatibility
handler = Mangum(app, lifespan="off")
