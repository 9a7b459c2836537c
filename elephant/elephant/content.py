# Static content for the public pages; it changes a few times a year.

ABOUT_FALLBACK = (
    "ELEPHANT is a nomadic queer techno dance party based in Manila, organized "
    "by a collective of LGBTQIA+ artists, DJs, activists and performers. \\n "
    "ELEPHANT advocates for safer spaces for the community and equitable pay "
    "among artists."
)

CONTACT_FALLBACK = (
    "For ticket informations, email us at "
    "elephantpartypreregistration@gmail.com or DM "
    "@thatelephantparty/@lancenavasca on instagram. \\n Elephant Party is "
    "always looking for volunteers, if you are queer and know anything about "
    "production, send us a DM @thatelephantparty on instagram."
)

CORE_MEMBERS = [
    {
        "name": "Shahani Gania SuperStarletXXX",
        "pronouns": "He/Him/She/Her/They/Them",
        "role": "Founder, Drag Queen, Host, Stylist",
        "image": "images/members/shahani-gania.jpg",
    },
    {
        "name": "Paul Jatayna",
        "pronouns": "He/Him/They",
        "role": "Founder, Production Designer, Stylist, Artist, DJ",
        "image": "images/members/paul-jatayna.jpg",
    },
    {
        "name": "Alexa Dignos",
        "pronouns": "She/Her",
        "role": "DJ, Stylist",
        "image": "images/members/alexa-dignos.jpg",
    },
    {
        "name": "Aly Cabral (T33G33)",
        "pronouns": "She/Her",
        "role": "DJ, Artist",
        "image": "images/members/aly-cabral.jpg",
    },
    {
        "name": "Andi Osmena",
        "pronouns": "He/They",
        "role": "DJ, Artist, CEO of Estes Estes Estes",
        "image": "images/members/andi-osmena.jpg",
    },
    {
        "name": "Celeste Lapida",
        "pronouns": "She/Her",
        "role": "DJ, Artist, Host, Performer, Owner, CEO, Capitalist of Estes Estes Estes",
        "image": "images/members/celeste-lapida.jpg",
    },
    {
        "name": "Lance Navasca",
        "pronouns": "They/Them",
        "role": "Model, Artist",
        "image": "images/members/lance-navasca.jpg",
    },
]

FEATURES = [
    {
        "title": "That Elephant Party creates safe spaces within Manila’s nightlife scene",
        "author": "by Kara Angan on l!fe (The Philippine Star)",
        "link": "https://philstarlife.com/geeky/129117-that-elephant-party-creates-safe-spaces-manila-nightlife-scene",
        "date": "March 24, 2023",
        "image": "images/features/f1.jpg",
    },
    {
        "title": "Manila’s fave queer party Elephant gets love in this docuseries",
        "author": "by Amrie Cruz on preen.ph",
        "link": "https://preen.ph/129435/manila-queer-party-elephant-in-docu-series",
        "date": "February 18, 2022",
        "image": "images/features/f2.jpg",
    },
    {
        "title": "''The future is queer'': Discover the enduring manifesto of the "
        "Filipino queer rave collective Elephant",
        "author": "by Samantha Nicole on MixMag Asia",
        "link": "https://mixmag.asia/feature/discover-the-enduring-manifesto-filipino-queer-rave-collective-elephant",
        "date": "October 26, 2021",
        "image": "images/features/f3.jpg",
    },
    {
        "title": "Queer Spaces: The Elephant Party at XX XX, Makati",
        "author": "by Christian San Jose, Celeste Lapida and Shahani Gania on NOLISOLI",
        "link": "https://nolisoli.ph/97980/xx-xx-the-elephant-party-queer-spaces-20210630/",
        "date": "June 30, 2021",
        "image": "images/features/f4.jpg",
    },
    {
        "title": "Elephant Party is Not Your Usual Night Out",
        "author": "by Miko Borje on PURVEYR",
        "link": "https://purveyr.com/2018/08/22/elephant-party-is-not-your-usual-night-out/",
        "date": "August 22, 2018",
        "image": "images/features/f5.jpg",
    },
]

MERCH = {
    "title": "Faith is for Everyone (Shirts)",
    "images": ["images/merch/merch1.jpg", "images/merch/merch2.jpg"],
    "variants": "Ivory (S/M) or White (XS/XL)",
    "price": "PHP 1299",
    "sold_out": True,
}
