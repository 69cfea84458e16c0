# setup.py
from setuptools import find_packages, setup

setup(
    name="worknearby",
    version="0.1.0",
    description="Proximity matching service for workers and employers",
    packages=find_packages(include=["worknearby", "worknearby.*"]),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn[standard]>=0.27",
        "sqlalchemy[asyncio]>=2.0",
        "aiosqlite>=0.19",
        "alembic>=1.13",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "python-dotenv>=1.0",
        "structlog>=24.1",
        "sentry-sdk>=1.40",
        "limits>=3.7",
    ],
    extras_require={
        "postgres": ["asyncpg>=0.29", "psycopg[binary]>=3.1"],
        "test": ["pytest>=8.0", "pytest-asyncio>=0.23", "httpx>=0.26"],
    },
)
