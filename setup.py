"""
NetOps - Inventory API for sites, containers and network devices
"""
from setuptools import setup, find_packages

setup(
    name="netops-api",
    version="1.0.0",
    description="Inventory API for sites, containers and network devices",
    author="NetOps Team",
    packages=find_packages(include=["netops_core", "netops_core.*", "netops_api", "netops_api.*"]),
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.110.0",
        "uvicorn[standard]>=0.27.0",
        "sqlalchemy>=2.0.0",
        "psycopg2-binary>=2.9.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "email-validator>=2.0.0",
        "cryptography>=41.0.0",
        "python-jose[cryptography]>=3.3.0",
        "bcrypt>=4.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-mock>=3.10.0",
            "httpx>=0.24.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "netops-api=netops_api.main:run",
            "netops-migrate=netops_core.db.migrate:main",
        ],
    },
)
