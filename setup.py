"""
Setup script for the film distribution backend
"""
from setuptools import setup, find_packages

setup(
    name="film_distribution",
    version="1.0.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10,<3.14",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn[standard]>=0.27",
        "sqlalchemy>=2.0",
        "psycopg2-binary>=2.9",
        "alembic>=1.13",
        "pydantic>=2.5",
        "email-validator>=2.0",
        "passlib[bcrypt]>=1.7.4",
        "bcrypt>=4.0",
        "python-jose[cryptography]>=3.3",
        "stripe>=8.0",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "httpx>=0.26",
        ],
    },
    entry_points={
        "console_scripts": [
            "film-distribution=film_distribution.main:run",
        ],
    },
)
