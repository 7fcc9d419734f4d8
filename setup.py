from setuptools import setup, find_packages

setup(
    name="gx",  # Package name
    version="0.1.0",  # Version number
    description="Convert natural language requests into shell commands with a hosted LLM.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "openai",
        "python-dotenv",
        "pydantic>=2",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "gx=gx.cli:main",
            "gxx=gx.cli:main_yolo",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
)
