from setuptools import setup, find_namespace_packages

setup(
    name="library_ledger",
    version="0.1.0",
    packages=find_namespace_packages(include=['api*', 'cli*', 'core*']),
    include_package_data=True,
    install_requires=[
        "Click",
        "SQLAlchemy>=2.0",
        "alembic",
        "fastapi",
        "pydantic>=2",
        "uvicorn",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",  # required by fastapi.testclient
        ],
    },
    entry_points={
        "console_scripts": [
            "library-ledger=cli.main:main",
        ],
    },
)
