# locales/messages.py
"""Bilingual (en/ar) messages returned to clients."""
from typing import Dict

MESSAGES: Dict[str, Dict[str, str]] = {
    "required": {"en": "This field is required.", "ar": "هذا الحقل مطلوب."},
    "requiredFieldsMissing": {"en": "Required fields are missing: {fields}.", "ar": "الحقول المطلوبة مفقودة: {fields}."},
    "imageOnly": {"en": "Only image files are allowed.", "ar": "مسموح بالصور فقط"},
    "imageTooLarge": {
        "en": "Image {name} is too large. Maximum size is {limit} bytes.",
        "ar": "الصورة {name} كبيرة جدًا. الحد الأقصى للحجم هو {limit} بايت.",
    },
    "imageDecodeFailed": {
        "en": "File {name} is not a valid image.",
        "ar": "الملف {name} ليس صورة صالحة.",
    },
    "tooManyFiles": {
        "en": "Too many files for field {field}. Maximum is {max}.",
        "ar": "عدد الملفات للحقل {field} كبير جدًا. الحد الأقصى هو {max}.",
    },
    "unexpectedField": {"en": "Unexpected file field: {field}.", "ar": "حقل ملف غير متوقع: {field}."},
    "multipartRequired": {
        "en": "Request must be multipart/form-data.",
        "ar": "يجب أن يكون الطلب من نوع multipart/form-data.",
    },
    "invalidBody": {"en": "Invalid request body.", "ar": "نص الطلب غير صالح."},
    "storageWriteFailed": {"en": "Could not store the uploaded file.", "ar": "تعذر حفظ الملف المرفوع."},
    "imageStateInvalid": {
        "en": "Exactly one image must be marked as main.",
        "ar": "يجب تحديد صورة رئيسية واحدة فقط.",
    },
    "mainImageNotFound": {
        "en": "Main image {url} is not one of the car images.",
        "ar": "الصورة الرئيسية {url} ليست من صور السيارة.",
    },
    "imageNotFound": {"en": "Image {url} not found.", "ar": "لم يتم العثور على الصورة {url}."},
    "unauthorized": {
        "en": "Unauthorized access. You do not have permission to perform this action.",
        "ar": "الوصول غير مصرح به. ليس لديك إذن لتنفيذ هذا الإجراء.",
    },
    "invalid_token": {
        "en": "Invalid token. Please log in again.",
        "ar": "رمز غير صالح. الرجاء تسجيل الدخول مرة أخرى.",
    },
    "admin_not_found": {"en": "Admin not found with id {id}.", "ar": "لم يتم العثور على المسؤول بالمعرف {id}."},
    "provide_email_password": {
        "en": "Please provide an email and password",
        "ar": "يرجى تقديم البريد الإلكتروني وكلمة المرور",
    },
    "invalid_credentials": {"en": "Invalid credentials", "ar": "بيانات الاعتماد غير صالحة"},
    "passwordTooShort": {
        "en": "Password must be at least 6 characters.",
        "ar": "يجب أن تتكون كلمة المرور من 6 أحرف على الأقل.",
    },
    "notFound": {"en": "Resource not found.", "ar": "المورد غير موجود."},
    "serverError": {"en": "Internal server error.", "ar": "خطأ داخلي في الخادم."},
    "invalidInput": {"en": "Invalid input provided.", "ar": "إدخال غير صالح."},
    "invalid_id": {"en": "Invalid ID format: {id}.", "ar": "تنسيق معرف غير صالح: {id}."},
    "invalidNumber": {"en": "Field {field} must be a number.", "ar": "يجب أن يكون الحقل {field} رقمًا."},
    "duplicate_key": {"en": "The {field} is already in use.", "ar": "الحقل {field} مستخدم بالفعل."},
    "newsNotFound": {"en": "News not found with id of {id}", "ar": "لم يتم العثور على الخبر بالمعرف {id}"},
    "newsDeleted": {"en": "News item deleted successfully", "ar": "تم حذف الخبر بنجاح"},
    "offerNotFound": {
        "en": "Seasonal offer not found with id of {id}",
        "ar": "لم يتم العثور على العرض الموسمي بالمعرف {id}",
    },
    "offerDeleted": {"en": "Seasonal offer deleted successfully", "ar": "تم حذف العرض الموسمي بنجاح"},
    "deleted": {"en": "item deleted successfully.", "ar": "تم الحذف بنجاح."},
    "contentUpdated": {"en": "Content updated successfully", "ar": "تم تحديث المحتوى بنجاح"},
    "updated": {"en": "Updated successfully", "ar": "تم التحديث بنجاح"},
    "socialUpdated": {
        "en": "Social media and contact info updated successfully",
        "ar": "تم تحديث الوسائط الاجتماعية ومعلومات الاتصال بنجاح",
    },
    "make_model_required": {"en": "Either provide both make name and model", "ar": "برجاء اضافة نوع وموديل السيارة"},
    "makeRequired": {"en": "Please provide the car make", "ar": "يرجى تقديم ماركة السيارة"},
    "makeInUse": {
        "en": "This make is still used by {count} car(s).",
        "ar": "هذه الماركة مستخدمة من قبل {count} سيارة.",
    },
    "invalidCondition": {
        "en": "Condition must be one of: {choices}.",
        "ar": "يجب أن تكون الحالة واحدة من: {choices}.",
    },
    "nameRequired": {"en": "Please provide name", "ar": "يرجى تقديم الاسم"},
    "mobileRequired": {"en": "Please provide mobile number", "ar": "يرجى تقديم رقم الهاتف"},
    "emailRequired": {"en": "Please provide email", "ar": "يرجى تقديم البريد الإلكتروني"},
    "invalidEmail": {"en": "Please provide a valid email", "ar": "يرجى تقديم بريد إلكتروني صحيح"},
    "messageRequired": {"en": "Please provide your message", "ar": "يرجى تقديم رسالتك"},
    "imageRequired": {"en": "Please upload an image", "ar": "يرجى تحميل صورة"},
    "titleRequired": {"en": "Please provide a news title", "ar": "يرجى تقديم عنوان الخبر"},
    "detailsRequired": {"en": "Please provide news details", "ar": "يرجى تقديم تفاصيل الخبر"},
    "contentRequired": {"en": "Content is required.", "ar": "المحتوى مطلوب."},
    "loggedOut": {"en": "Logged out successfully", "ar": "تم تسجيل الخروج بنجاح"},
    "faqRequired": {
        "en": "Question and answer are required in both languages.",
        "ar": "السؤال والإجابة مطلوبان باللغتين.",
    },
}


def msg(key: str, **params) -> Dict[str, str]:
    """Return the {en, ar} message for `key` with {placeholders} filled in."""
    entry = MESSAGES.get(key, MESSAGES["serverError"])
    out = {}
    for lang, text in entry.items():
        for name, value in params.items():
            text = text.replace("{" + name + "}", str(value))
        out[lang] = text
    return out
