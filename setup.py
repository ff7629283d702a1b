from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="hisen-desk",
    version="0.1.0",  # Keep in sync with hisendesk/__version__.py
    author="Hisen Desk Team",
    author_email="team@hisendesk.dev",
    description="Desktop diagnostics: system info, audio/camera devices and a quick network test",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/hisen-desk/hisen-desk",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "Topic :: System :: Monitoring",
    ],
    python_requires=">=3.10",
    install_requires=[
        "typer>=0.9.0",
        "rich>=13.0.0",
        "questionary>=2.0.0",
        "loguru>=0.7.0",
        "pydantic>=2.0.0",
        "PyYAML>=6.0",
        "psutil>=5.9.0",
        "sounddevice>=0.4.6",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "black>=23.0",
            "ruff>=0.1.0",
            "mypy>=1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "hisendesk=hisendesk.__main__:main",
        ],
    },
)
