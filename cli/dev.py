def main() -> None:
    """Run development server with auto-reload against the local CSV."""
    import uvicorn

    uvicorn.run(
        "txn_explorer.main:create_app",
        factory=True,
        host="127.0.0.1",
        port=8080,
        reload=True,
        log_level="info",
    )
