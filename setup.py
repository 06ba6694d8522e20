from setuptools import setup, find_packages

# Read the contents of README.md for the long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="logical_cluster_manager",
    version="0.1.0",
    author="Logical Cluster Manager Team",
    description="Partition Kubernetes nodes into named logical clusters with a node label",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(where=".", include=["logical_cluster_manager", "logical_cluster_manager.*"]),
    package_dir={"": "."},
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
    ],
    python_requires=">=3.8",
    install_requires=[
        "kubernetes>=18.20.0",
        "PyYAML>=5.4",
        "urllib3>=1.26",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=2.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "logical-cluster=logical_cluster_manager.main:main",
        ],
    },
)
