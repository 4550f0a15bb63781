# m6a-prediction/
# ├── README.md
# ├── setup.py
# ├── m6a_prediction/
# │   ├── __init__.py
# │   ├── cli.py
# │   ├── configs/
# │   │   ├── m6a_prediction.yaml
# │   ├── core/
# │   │   ├── __init__.py
# │   │   ├── feature_schema.py
# │   │   ├── validators.py
# │   ├── features/
# │   │   ├── __init__.py
# │   │   ├── sequence_encoding.py
# │   ├── inference/
# │   │   ├── __init__.py
# │   │   ├── io_utils.py
# │   │   ├── predictor.py
# │   ├── system/
# │   │   ├── __init__.py
# │   │   ├── config.py
# ├── tests/

import os

from setuptools import setup, find_packages

install_requires = [
    'numpy',
    'pandas',
    'polars',
    'pyarrow',
    'scikit-learn>=1.2',
    'joblib',
    'pyyaml',
]

long_description = ''
if os.path.exists('README.md'):
    long_description = open('README.md').read()

setup(
    name='m6a-prediction',
    version='0.1.0',
    description='N6-methyladenosine (m6A) site prediction from sequence and genomic features',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=install_requires,
    python_requires='>=3.9',

    extras_require={
        'dev': ['pytest', ],
    },
    entry_points={
        'console_scripts': [
            'm6a-predict=m6a_prediction.cli:main',
        ],
    },

    include_package_data=True,
    package_data={
        'm6a_prediction': ['configs/*.yaml'],
    },
)
