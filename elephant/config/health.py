from django.http import HttpResponse


def health_check(request):
    """Health check response for Elastic Beanstalk; never calls the backend."""
    return HttpResponse("OK")
