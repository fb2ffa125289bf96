"""
Contact Relay API
FastAPI application that forwards contact-form submissions by email.
"""

import logging

from fastapi import FastAPI

from app.routers import contact

# Configure logging to output to console
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = FastAPI(
    title="Contact Relay API",
    description="Forwards contact-form submissions to an inbox via Resend",
    version="0.1.0",
)

app.include_router(contact.router, tags=["contact"])


@app.get("/health")
async def health():
    return {"status": "ok"}
