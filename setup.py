"""
Setup script for the pushquiz-client package.
"""

from setuptools import setup, find_packages

setup(
    name="pushquiz-client",
    version="1.0.0",
    description="PushQuiz participant client - join a live quiz room and answer in time",
    author="PushQuiz Team",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
        "websockets>=12.0",
        "tzlocal>=5.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
        "dev": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
            "build",
            "wheel",
        ],
    },
    entry_points={
        "console_scripts": [
            "pushquiz-client=pushquiz_client.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
