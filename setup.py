from setuptools import setup, find_packages


# ===============================
# Setup run by 'pip install -e .'
# ===============================
setup(
    name="histlib",
    version="1.0.0",
    description="Color histogram plots and value-channel contrast normalization with OpenCV",
    packages=find_packages(include=["histlib", "histlib.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "opencv-python<5",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
    zip_safe=False,
)
