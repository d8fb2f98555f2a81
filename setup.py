"""
Setup script for pathviz
Pathfinding-trapezoid rasterization and route planning over navigation meshes
"""
from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="pathviz",
    version="0.1.0",
    description="Rasterize pathfinding trapezoids into debug images and walkability masks, and plan routes over them",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Multimedia :: Graphics",
        "Topic :: Scientific/Engineering :: Visualization",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        # Core scientific stack
        "numpy>=1.20",
        "pandas>=1.3,<3.0",
        # Rendering / UI
        "pygame>=2.6,<3.0",
        "pillow>=11.0",
    ],
    extras_require={
        "dev": [
            "black>=22.0",
            "isort>=5.0",
            "pytest>=7.0",
            "pytest-cov>=3.0",
            # geometric oracle for the rasterizer tests
            "shapely>=2.0,<3.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pathviz-route=pathviz.route_planner.viewer:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
