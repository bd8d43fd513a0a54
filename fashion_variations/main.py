import logging

import uvicorn

from fashion_variations.api.app import app
from fashion_variations.api.downloads.routes import router as downloads_router
from fashion_variations.api.variations.routes import router as variations_router
from fashion_variations.config import HOST, PORT

logging.info("Application starting up...")

# Include routers
app.include_router(variations_router, prefix="/api")
app.include_router(downloads_router, prefix="/api")


def run():
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
