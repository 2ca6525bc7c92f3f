GENDERS = [
    'Male',
    'Female',
    'Prefer not to say',
    'Others',
    ''
]

MARITAL_STATUSES = [
    'Single',
    'Married',
    'Divorced',
    'Widowed',
    ''
]

# Upload slots accepted by /api/onboard, one file each
DOCUMENT_FIELDS = [
    'tenthMarksheet',
    'twelfthMarksheet',
    'degreeCertificate',
    'aadhar',
    'pan',
    'photo'
]

EXPERIENCE_FIELDS = ['companyName', 'position', 'fromDate', 'toDate']

# Public URL prefix for stored uploads
UPLOADS_URL_PREFIX = '/uploads'
