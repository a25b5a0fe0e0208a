from django.shortcuts import render
from django.views import View


class HomePage(View):
    """Landing page"""
    template_name = 'home.html'

    def get(self, request):
        return render(request, self.template_name)
