from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase, override_settings

from apps.core.exceptions import FileTooLarge, UnsupportedFormat
from apps.core.upload_validators import validate_upload

PDF = b'%PDF-1.7\n%\xe2\xe3\xcf\xd3\n'
PNG = b'\x89PNG\r\n\x1a\n\x00\x00'
JPEG = b'\xff\xd8\xff\xe0\x00\x10JFIF'
DOCX = b'PK\x03\x04\x14\x00\x06\x00'
DOC = b'\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1'

DOCX_MIME = 'application/vnd.openxmlformats-officedocument.wordprocessingml.document'


class ValidateUploadTests(SimpleTestCase):

    def test_accepts_each_allowed_format(self):
        cases = [
            ('scan.pdf', PDF, 'application/pdf'),
            ('photo.png', PNG, 'image/png'),
            ('photo.JPG', JPEG, 'image/jpeg'),
            ('cv.docx', DOCX, DOCX_MIME),
            ('cv.doc', DOC, 'application/msword'),
        ]
        for name, content, mime in cases:
            with self.subTest(name=name):
                upload = SimpleUploadedFile(name, content, content_type=mime)
                self.assertEqual(validate_upload(upload), mime)

    def test_rejects_disallowed_extension(self):
        upload = SimpleUploadedFile('logo.svg', b'<svg/>', content_type='image/svg+xml')

        with self.assertRaises(UnsupportedFormat) as ctx:
            validate_upload(upload)

        self.assertEqual(ctx.exception.details, {'document': [UnsupportedFormat.default_message]})

    def test_rejects_disallowed_mime(self):
        upload = SimpleUploadedFile('scan.pdf', PDF, content_type='text/html')
        with self.assertRaises(UnsupportedFormat):
            validate_upload(upload)

    def test_rejects_magic_byte_mismatch(self):
        upload = SimpleUploadedFile('photo.png', PDF, content_type='image/png')

        with self.assertRaises(UnsupportedFormat) as ctx:
            validate_upload(upload)

        self.assertEqual(ctx.exception.message, 'File content does not match its declared type.')

    def test_rejects_empty_file(self):
        upload = SimpleUploadedFile('empty.pdf', b'', content_type='application/pdf')
        with self.assertRaises(UnsupportedFormat):
            validate_upload(upload)

    def test_stream_is_rewound(self):
        upload = SimpleUploadedFile('scan.pdf', PDF, content_type='application/pdf')
        validate_upload(upload)
        self.assertEqual(upload.read(), PDF)

    @override_settings(MAX_UPLOAD_SIZE_MB=1)
    def test_rejects_oversized_file(self):
        upload = SimpleUploadedFile('big.pdf', PDF + b'\x00' * (1024 * 1024), content_type='application/pdf')

        with self.assertRaises(FileTooLarge) as ctx:
            validate_upload(upload)

        self.assertIn('1 MB', ctx.exception.message)
