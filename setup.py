from setuptools import setup, find_packages

def readme():
    with open('README.md') as f:
        return f.read()

setup(
    name='pomdpformat',
    version='0.1',
    description='Readers for POMDP model files and pomdp-solve alpha vector files',
    long_description=readme(),
    long_description_content_type='text/markdown',
    keywords = [
        'pomdp',
        'planning',
        'file formats'
    ],
    license='MIT',
    packages=find_packages(include=['pomdpformat', 'pomdpformat.*']),
    python_requires='>=3.7',
    install_requires=[
        'numpy',
        'frozendict',
    ],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=False,
    classifiers=[
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
    ],
)
