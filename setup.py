from setuptools import find_packages, setup

setup(
    name="openapi_ts_client",
    packages=find_packages(exclude=["tests", "tests.*"]),
    version="0.1.0",
    description="Генератор TypeScript (axios) клиентов из OpenAPI спецификаций",
    author="lite",
    license="MIT",
    install_requires=[
        "jsonref>=1.0.0",
        "pydantic>=2.4.0",
        "toml>=0.10.0",
        "httpx>=0.24.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "black>=23.0.0",
            "isort>=5.12.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "openapi-ts-client = openapi_ts_client.cli:generate",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
