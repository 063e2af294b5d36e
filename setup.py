from setuptools import setup, find_packages

setup(
    name="folreasoner",
    version="0.1.0",
    description="First-order logic reasoner based on resolution refutation",
    author="folreasoner Contributors",
    author_email="",

    # Find packages in the src/ directory
    packages=find_packages(where="src"),
    package_dir={"": "src"},

    zip_safe=False,
    python_requires=">=3.10",

    install_requires=[
        "lark>=1.1",
        "networkx>=2.6",
        "pyyaml>=5.4",
        "python-dotenv>=0.19",
    ],

    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov",
        ],
    },

    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
    ],
)
