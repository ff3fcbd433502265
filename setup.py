from setuptools import setup, find_namespace_packages

setup(
    name="golf-caddy-physics",
    version="0.1.0",
    description="Ball-flight, landing and roll physics for the Golf Caddy game",
    author="Golf Caddy",
    packages=find_namespace_packages(include=["golfcaddy*"]),
    python_requires=">=3.11",
    install_requires=[
        "numpy>=1.26.0",
        "scipy>=1.12.0",
    ],
    extras_require={
        "test": ["pytest>=8.0.0"],
    },
    entry_points={
        "console_scripts": [
            "golfcaddy=golfcaddy.main:main",
        ],
    },
)
