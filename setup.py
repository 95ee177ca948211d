from pathlib import Path
from setuptools import find_packages, setup

README = Path(__file__).parent / "README.md"

setup(
    name="packshim",
    version="1.0.0",
    description="Browser bundle builder that patches, shrinks and stamps CommonJS modules",
    long_description=README.read_text(encoding="utf-8") if README.exists() else "",
    long_description_content_type="text/markdown",
    author="GAHEOS",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[],
    extras_require={"test": ["pytest>=7"]},
    entry_points={"console_scripts": ["packshim=packshim.cli:main"]},
)
