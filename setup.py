from setuptools import setup, find_packages

setup(
    name="tracking-extractor",
    version="1.0.0",
    description="Carrier tracking-number extraction and receiving batch toolkit",
    author="Your Name",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "structlog>=23.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "tracking-extractor=tracking_extractor.main:main",
        ],
    },
)
