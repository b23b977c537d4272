# setup.py
from setuptools import setup, find_packages

setup(
    name="idea-research-assistant",
    version="0.1",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        'python-dotenv',
        'pymongo',
        'tavily-python',
        'openai>=1.0',
        'pydantic>=2',
        'fastapi',
        'uvicorn',
    ],
    extras_require={
        'test': [
            'pytest',
            'httpx',
        ],
    },
    entry_points={
        'console_scripts': [
            'idea-research=src.idea_research.cli:main',
            'idea-research-api=src.idea_research.api:main',
        ],
    },
)
