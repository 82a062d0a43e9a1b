from setuptools import setup, find_packages

setup(
    name='pyspintorques',
    version='0.1.0',
    author='Colin Jermain, Minh-Hai Nguyen',
    packages=find_packages(exclude=['tests']),
    scripts=[],
    license='MIT License',
    description='Spin transfer and spin Hall torques for atomistic spin dynamics',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    python_requires='>=3.8',
    install_requires=[
        'numpy',
        'numba',
    ],
    extras_require={
        'test': ['pytest'],
    },
)
