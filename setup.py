from setuptools import setup, find_packages

setup(
    name="chat_backend",
    version="0.1.0",
    description="Realtime chat backend: presence tracking and message delivery over Socket.IO",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "fastapi==0.116.1",
        "uvicorn[standard]==0.35.0",
        "sqlalchemy==2.0.42",
        "aiosqlite==0.21.0",
        "environs==14.2.0",
        "pydantic==2.11.7",
        "dishka>=1.6,<2",
        "python-socketio>=5.11,<6",
    ],
    extras_require={
        "test": [
            "pytest>=8",
            "httpx>=0.27",
        ],
    },
    python_requires=">=3.10",
    entry_points={
        "console_scripts": [
            "chat-backend=chat_backend.main:main"
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
