#!/usr/bin/env python3
"""
Startup script for the AssignmentPro backend
Reads HOST, PORT and RELOAD from the environment (or .env) and runs uvicorn
"""

import os

import uvicorn
from dotenv import load_dotenv

def main():
    load_dotenv()

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    reload = os.getenv("RELOAD", "true").lower() == "true"
    log_level = os.getenv("LOG_LEVEL", "info").lower()

    print("Starting AssignmentPro Backend Server...")
    print(f"Host: {host}  Port: {port}  Reload: {reload}")
    print(f"Database: {os.getenv('DATABASE_URL', 'sqlite:///./assignmentpro.db')}")
    print("=" * 50)

    uvicorn.run("main:app", host=host, port=port, reload=reload, log_level=log_level)

if __name__ == "__main__":
    main()
