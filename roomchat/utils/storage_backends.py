from django.conf import settings
from storages.backends.s3boto3 import S3Boto3Storage


class MediaStorage(S3Boto3Storage):
    """
    Private document bucket. Works against AWS S3 or any S3-compatible
    endpoint (Supabase storage exposes one) via AWS_S3_ENDPOINT_URL.
    """
    bucket_name = settings.AWS_STORAGE_BUCKET_NAME
    endpoint_url = settings.AWS_S3_ENDPOINT_URL
    location = 'media'
    default_acl = 'private'
    file_overwrite = False
    custom_domain = False
    querystring_auth = True
    querystring_expire = settings.AWS_QUERYSTRING_EXPIRE
