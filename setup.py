from setuptools import setup, find_packages

setup(
    name="gdrive_mirror",
    version="0.3.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "google-api-python-client>=2.107.0",
        "google-auth>=2.23.0",
        "google-auth-httplib2>=0.1.1",
        "google-auth-oauthlib>=1.1.0",
        "tqdm>=4.66.1",
        "tabulate>=0.9.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "gdrive-mirror=gdrive_mirror:main",
        ],
    },
    author="User",
    author_email="user@example.com",
    description="A tool to mirror local folders to Google Drive through a single upload queue",
    keywords="google, drive, upload, folder, mirror",
    python_requires=">=3.8",
)
